"""Table measurement: column widths, alignment, and wrapped row blocks."""

from __future__ import annotations

from typing import List, Sequence

from ..models import Table
from .pdf_metrics import TextMeasurer
from .pdf_runs import runs_for_cell
from .pdf_settings import LayoutConfig
from .pdf_types import (
    ColumnSpec,
    FontVariant,
    RowBlock,
    StyledRun,
    TableLayout,
    TextCategory,
    WrappedLine,
)
from .pdf_wrap import single_line_width, wrap_runs


def layout_table(
    table: Table, *, width: float, measurer: TextMeasurer, config: LayoutConfig
) -> TableLayout:
    """Measure a table against the available content width.

    Column widths are decided once from unwrapped cell widths, then every cell
    is wrapped to its final column width. Labels and the title default to
    bold, cells to regular. Tinting alternates counting the label row, or a
    missing one, as the first untinted row.

    Args:
        table: Table record.
        width: Content width the table is centered in.
        measurer: Text width provider.
        config: Layout configuration.
    Returns:
        TableLayout ready for the pagination cursor.
    """

    options = config.table
    size = config.font_size(TextCategory.TABLE_BODY)
    labels = [runs_for_cell(label, variant=FontVariant.BOLD) for label in table.padded_labels()]
    rows = [
        [runs_for_cell(cell, variant=FontVariant.REGULAR) for cell in row]
        for row in table.padded_rows()
    ]
    usable = max(width - 2 * options.outer_horizontal_margin, 0.0)
    natural = natural_column_widths(
        labels=labels, rows=rows, measurer=measurer, size=size
    )
    widths = column_widths(
        natural,
        usable=usable,
        gap=options.horizontal_cell_margin,
        minimum=options.min_column_width,
    )
    line_height = config.line_height(TextCategory.TABLE_BODY)
    wrapped_labels = _wrap_row(cells=labels, widths=widths, measurer=measurer, size=size)
    wrapped_rows = [
        _wrap_row(cells=row, widths=widths, measurer=measurer, size=size) for row in rows
    ]
    columns = _column_specs(
        widths=widths,
        gap=options.horizontal_cell_margin,
        wrapped=[wrapped_labels, *wrapped_rows] if labels else wrapped_rows,
    )
    label_row = (
        _row_block(cells=wrapped_labels, line_height=line_height, is_label=True)
        if labels
        else None
    )
    row_blocks = tuple(
        _row_block(
            cells=cells,
            line_height=line_height,
            tinted=options.off_row_color is not None and index % 2 == 1,
        )
        for index, cells in enumerate(wrapped_rows, start=1 if labels else 0)
    )
    title_lines = _title_lines(
        table=table, usable=usable, measurer=measurer, config=config
    )
    return TableLayout(
        title_lines=tuple(title_lines),
        columns=tuple(columns),
        label_row=label_row,
        rows=row_blocks,
        width=sum(widths) + options.horizontal_cell_margin * max(len(widths) - 1, 0),
        usable_width=usable,
        line_height=line_height,
        title_line_height=config.line_height(TextCategory.TABLE_TITLE),
        title_gap=options.title_gap,
        row_gap=options.vertical_cell_margin,
    )


def natural_column_widths(
    *,
    labels: Sequence[Sequence[StyledRun]],
    rows: Sequence[Sequence[Sequence[StyledRun]]],
    measurer: TextMeasurer,
    size: float,
) -> List[float]:
    """Return each column's widest single-line cell width, label included.

    Args:
        labels: Label runs per column (may be empty).
        rows: Cell runs per row, padded to the column count.
        measurer: Text width provider.
        size: Cell font size.
    Returns:
        Natural width per column.
    """

    count = max([len(labels), *(len(row) for row in rows)])
    widths = [0.0] * count
    for row in [labels, *rows]:
        for column, cell in enumerate(row):
            cell_width = single_line_width(cell, measurer=measurer, size=size)
            widths[column] = max(widths[column], cell_width)
    return widths


def column_widths(
    natural: Sequence[float], *, usable: float, gap: float, minimum: float = 0.0
) -> List[float]:
    """Distribute the usable width over columns.

    Columns are visited from narrowest to widest. A column narrower than the
    current even share keeps its natural width and its slack is spread over
    the columns still to come; every other column gets the current share.

    Args:
        natural: Natural width per column.
        usable: Width available to the whole table.
        gap: Space between adjacent columns.
        minimum: Narrowest width a column is given.
    Returns:
        Final width per column, in column order.

    Example:
        >>> column_widths([10.0, 200.0], usable=200.0, gap=0.0)
        [10.0, 190.0]
    """

    count = len(natural)
    if not count:
        return []
    share = max((usable - gap * (count - 1)) / count, 0.0)
    widths = [0.0] * count
    remaining = count - 1
    for column in sorted(range(count), key=lambda index: (natural[index], index)):
        wanted = max(natural[column], minimum)
        if wanted < share:
            widths[column] = wanted
            if remaining:
                share += (share - wanted) / remaining
        else:
            widths[column] = share
        remaining -= 1
    return widths


def _wrap_row(
    *,
    cells: Sequence[Sequence[StyledRun]],
    widths: Sequence[float],
    measurer: TextMeasurer,
    size: float,
) -> List[List[WrappedLine]]:
    return [
        wrap_runs(cell, width=widths[column], measurer=measurer, size=size)
        for column, cell in enumerate(cells)
    ]


def _column_specs(
    *, widths: Sequence[float], gap: float, wrapped: Sequence[Sequence[Sequence[WrappedLine]]]
) -> List[ColumnSpec]:
    """Return column geometry, centering columns whose cells are all one line.

    Args:
        widths: Final column widths.
        gap: Space between adjacent columns.
        wrapped: Wrapped cells per row, label row included.
    Returns:
        ColumnSpec per column.
    """

    specs: List[ColumnSpec] = []
    x = 0.0
    for column, column_width in enumerate(widths):
        centered = all(len(row[column]) <= 1 for row in wrapped)
        specs.append(ColumnSpec(x=x, width=column_width, centered=centered))
        x += column_width + gap
    return specs


def _row_block(
    *,
    cells: Sequence[Sequence[WrappedLine]],
    line_height: float,
    is_label: bool = False,
    tinted: bool = False,
) -> RowBlock:
    line_count = max([1, *(len(lines) for lines in cells)])
    return RowBlock(
        cells=tuple(tuple(lines) for lines in cells),
        line_count=line_count,
        height=line_count * line_height,
        is_label=is_label,
        tinted=tinted,
    )


def _title_lines(
    *, table: Table, usable: float, measurer: TextMeasurer, config: LayoutConfig
) -> List[WrappedLine]:
    if not table.title.strip():
        return []
    runs = runs_for_cell(table.title, variant=FontVariant.BOLD)
    return wrap_runs(
        runs,
        width=usable,
        measurer=measurer,
        size=config.font_size(TextCategory.TABLE_TITLE),
    )
