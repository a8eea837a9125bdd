"""Lay out a sequence of content records into pages."""

from __future__ import annotations

from typing import List, Sequence

from tqdm import tqdm

from ..logger import get_logger
from ..models import ContentRecord, Table
from .pdf_metrics import FontMetrics, TextMeasurer
from .pdf_pagination import PageCursor
from .pdf_runs import parse_markup, runs_for_cell
from .pdf_settings import LayoutConfig
from .pdf_tables import layout_table
from .pdf_types import FontVariant, Page, ParagraphKind, StyledRun, TextCategory
from .pdf_wrap import wrap_paragraph, wrap_runs

LOGGER = get_logger(__name__)

TITLE_PAGE_BOOKMARK = "Title Page"


def layout_document(
    records: Sequence[ContentRecord],
    *,
    config: LayoutConfig,
    metrics: FontMetrics,
    title: str | None = None,
    show_progress: bool = False,
) -> List[Page]:
    """Lay out every record in order and return the sealed pages.

    Args:
        records: Content records in book order.
        config: Layout configuration.
        metrics: Font metrics provider.
        title: Optional document title drawn on its own title page.
        show_progress: Show a tqdm progress bar while laying out records.
    Returns:
        Pages in document order.
    """

    measurer = TextMeasurer(metrics=metrics, scalars=config.scalars)
    cursor = PageCursor(config=config, measurer=measurer)
    if title:
        _layout_title_page(cursor=cursor, title=title, measurer=measurer, config=config)
    progress = (
        tqdm(total=len(records), desc="Laying out records", unit="record")
        if show_progress and records
        else None
    )
    try:
        for record in records:
            layout_record(record, cursor=cursor, measurer=measurer, config=config)
            if progress is not None:
                progress.update(1)
    finally:
        if progress is not None:
            progress.close()
    pages = cursor.finish()
    LOGGER.info("Laid out %d records on %d pages", len(records), len(pages))
    return pages


def _layout_title_page(
    *, cursor: PageCursor, title: str, measurer: TextMeasurer, config: LayoutConfig
) -> None:
    """Draw the document title centered on a page of its own.

    Args:
        cursor: Pagination cursor.
        title: Title markup.
        measurer: Text width provider.
        config: Layout configuration.
    """

    cursor.start_page(bookmark=TITLE_PAGE_BOOKMARK)
    width = cursor.content_width
    lines = wrap_runs(
        runs_for_cell(title, variant=FontVariant.REGULAR),
        width=width,
        measurer=measurer,
        size=config.font_size(TextCategory.TITLE),
    )
    cursor.center_vertically(len(lines) * config.line_height(TextCategory.TITLE))
    cursor.place_lines(lines, category=TextCategory.TITLE, center_in=width)


def layout_record(
    record: ContentRecord,
    *,
    cursor: PageCursor,
    measurer: TextMeasurer,
    config: LayoutConfig,
) -> None:
    """Lay out one record: header, subtitle, fields, then the body.

    Args:
        record: Content record.
        cursor: Pagination cursor shared across the document.
        measurer: Text width provider.
        config: Layout configuration.
    """

    if config.record_starts_new_page or not cursor.has_page:
        cursor.start_page()
    else:
        cursor.advance(config.spacing.record_gap)
    cursor.ensure(config.line_height(TextCategory.HEADER))
    cursor.add_bookmark(record.title)
    width = cursor.content_width
    _place_block(
        runs=runs_for_cell(record.title, variant=FontVariant.REGULAR),
        cursor=cursor,
        measurer=measurer,
        config=config,
        category=TextCategory.HEADER,
        width=width,
    )
    if record.subtitle:
        _place_block(
            runs=runs_for_cell(record.subtitle, variant=FontVariant.ITALIC),
            cursor=cursor,
            measurer=measurer,
            config=config,
            category=TextCategory.BODY,
            width=width,
        )
    cursor.advance(config.spacing.header_gap)
    for label, value in record.fields:
        _place_block(
            runs=field_runs(label, value),
            cursor=cursor,
            measurer=measurer,
            config=config,
            category=TextCategory.BODY,
            width=width,
        )
    if record.fields:
        cursor.advance(config.spacing.header_gap)
    layout_body(
        record.full_body(),
        tables=record.tables,
        cursor=cursor,
        measurer=measurer,
        config=config,
    )


def field_runs(label: str, value: str) -> List[StyledRun]:
    """Return runs for a ``Label: value`` attribute line.

    Example:
        >>> [run.text for run in field_runs("Range", "60 feet")]
        ['Range: ', '60 feet']
    """

    return [StyledRun(f"{label}: ", FontVariant.BOLD), *runs_for_cell(value, variant=FontVariant.REGULAR)]


def _place_block(
    *,
    runs: List[StyledRun],
    cursor: PageCursor,
    measurer: TextMeasurer,
    config: LayoutConfig,
    category: TextCategory,
    width: float,
) -> None:
    lines = wrap_runs(runs, width=width, measurer=measurer, size=config.font_size(category))
    cursor.place_lines(lines, category=category)


def layout_body(
    body: str,
    *,
    tables: Sequence[Table],
    cursor: PageCursor,
    measurer: TextMeasurer,
    config: LayoutConfig,
) -> None:
    """Lay out a markup body with its referenced tables.

    Consecutive paragraphs advance one line each. Entering or leaving a
    bullet group adds the paragraph gap, so grouped bullets sit tighter than
    the surrounding text. Tables are preceded by the paragraph gap and
    followed by the table's outer vertical margin; an empty paragraph leaves
    a blank line.

    Args:
        body: Markup text.
        tables: Tables addressable by ``[table][N]``.
        cursor: Pagination cursor.
        measurer: Text width provider.
        config: Layout configuration.
    """

    width = cursor.content_width
    gap = config.spacing.paragraph_gap
    previous: ParagraphKind | None = None
    for paragraph in parse_markup(body, table_count=len(tables)):
        kind = paragraph.kind
        if kind is ParagraphKind.TABLE_REFERENCE and paragraph.table_index is not None:
            if previous is not None and previous is not ParagraphKind.TABLE_REFERENCE:
                cursor.advance(gap)
            layout = layout_table(
                tables[paragraph.table_index],
                width=width,
                measurer=measurer,
                config=config,
            )
            cursor.place_table(layout)
            cursor.advance(config.table.outer_vertical_margin)
        else:
            if _changes_group(previous=previous, kind=kind):
                cursor.advance(gap)
            lines = wrap_paragraph(
                paragraph, width=width, measurer=measurer, config=config
            )
            if lines:
                cursor.place_lines(lines, category=TextCategory.BODY)
            else:
                cursor.blank_line(TextCategory.BODY)
        previous = kind


def _changes_group(*, previous: ParagraphKind | None, kind: ParagraphKind) -> bool:
    """Return True when a paragraph enters or leaves a bullet group.

    Example:
        >>> _changes_group(previous=ParagraphKind.BULLET_ITEM, kind=ParagraphKind.NORMAL)
        True
    """

    if previous is None or previous is ParagraphKind.TABLE_REFERENCE:
        return False
    entering = kind is ParagraphKind.BULLET_ITEM and previous is not ParagraphKind.BULLET_ITEM
    leaving = previous is ParagraphKind.BULLET_ITEM and kind is not ParagraphKind.BULLET_ITEM
    return entering or leaving
