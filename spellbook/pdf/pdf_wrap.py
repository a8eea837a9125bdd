"""Greedy line wrapping of styled runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .pdf_constants import BULLET_PREFIX, EPSILON
from .pdf_metrics import TextMeasurer
from .pdf_settings import LayoutConfig
from .pdf_types import (
    FontVariant,
    Paragraph,
    ParagraphKind,
    PositionedRun,
    StyledRun,
    TextCategory,
    WrappedLine,
)


@dataclass(slots=True)
class _Word:
    """A space-free unit that is never broken; it may mix variants.

    Args:
        pieces: Runs that make up the word.
        space_before: Variant of the space preceding the word, if any.
    """

    pieces: List[StyledRun]
    space_before: FontVariant | None


def split_words(runs: Sequence[StyledRun]) -> List[_Word]:
    """Split runs on spaces into words, remembering each space's variant.

    Example:
        >>> [len(word.pieces) for word in split_words([StyledRun("a b"), StyledRun("c", FontVariant.BOLD)])]
        [1, 2]
    """

    words: List[_Word] = []
    pieces: List[StyledRun] = []
    lead: FontVariant | None = None
    pending: FontVariant | None = None
    for run in runs:
        for position, part in enumerate(run.text.split(" ")):
            if position and pending is None:
                pending = run.variant
                if pieces:
                    words.append(_Word(pieces=pieces, space_before=lead))
                    pieces = []
            if not part:
                continue
            if not pieces:
                lead = pending if words else None
                pending = None
            pieces.append(StyledRun(part, run.variant))
    if pieces:
        words.append(_Word(pieces=pieces, space_before=lead))
    return words


def wrap_runs(
    runs: Sequence[StyledRun],
    *,
    width: float,
    measurer: TextMeasurer,
    size: float,
    first_indent: float = 0.0,
    rest_indent: float = 0.0,
) -> List[WrappedLine]:
    """Greedily wrap runs into lines no wider than ``width``.

    A word that alone is wider than the column is placed on its own line.

    Args:
        runs: Styled runs of one paragraph.
        width: Column width in points.
        measurer: Text width provider.
        size: Font size in points.
        first_indent: Start offset of the first line.
        rest_indent: Start offset of continuation lines.
    Returns:
        Wrapped lines; empty when there are no words.
    """

    lines: List[WrappedLine] = []
    current: List[PositionedRun] = []
    indent = first_indent
    x = first_indent
    for word in split_words(runs):
        widths = [
            measurer.width(piece.text, variant=piece.variant, size=size)
            for piece in word.pieces
        ]
        space = ""
        space_width = 0.0
        if current and word.space_before is not None:
            space = " "
            space_width = measurer.width(space, variant=word.space_before, size=size)
        if current and x + space_width + sum(widths) > width + EPSILON:
            lines.append(WrappedLine(runs=tuple(current), width=x, indent=indent))
            current = []
            indent = rest_indent
            x = rest_indent
            space_width = 0.0
        if current and space:
            _place(line=current, text=space, variant=word.space_before, x=x, width=space_width)
            x += space_width
        for piece, piece_width in zip(word.pieces, widths):
            _place(line=current, text=piece.text, variant=piece.variant, x=x, width=piece_width)
            x += piece_width
    if current:
        lines.append(WrappedLine(runs=tuple(current), width=x, indent=indent))
    return lines


def _place(
    *,
    line: List[PositionedRun],
    text: str,
    variant: FontVariant | None,
    x: float,
    width: float,
) -> None:
    """Append text to a line, extending the last run when it is contiguous."""

    variant = variant or FontVariant.REGULAR
    if line:
        last = line[-1]
        if last.variant is variant and abs(last.end - x) < EPSILON:
            line[-1] = PositionedRun(last.x, last.text + text, variant, last.width + width)
            return
    line.append(PositionedRun(x, text, variant, width))


def wrap_paragraph(
    paragraph: Paragraph,
    *,
    width: float,
    measurer: TextMeasurer,
    config: LayoutConfig,
    category: TextCategory = TextCategory.BODY,
) -> List[WrappedLine]:
    """Wrap a paragraph applying the indentation policy for its kind.

    The first paragraph of a section starts flush-left; later normal
    paragraphs indent their first line by the tab amount. Bullet items draw
    the bullet glyph at the bullet indent and hang every line under the
    text start.

    Args:
        paragraph: Normal or bullet paragraph.
        width: Column width in points.
        measurer: Text width provider.
        config: Layout configuration.
        category: Text category that selects the font size.
    Returns:
        Wrapped lines; empty for an empty normal paragraph.
    """

    size = config.font_size(category)
    if paragraph.kind is ParagraphKind.BULLET_ITEM:
        return _wrap_bullet(
            paragraph=paragraph, width=width, measurer=measurer, config=config, size=size
        )
    indent = 0.0 if paragraph.is_first_in_block else config.spacing.tab_indent
    return wrap_runs(
        paragraph.runs, width=width, measurer=measurer, size=size, first_indent=indent
    )


def _wrap_bullet(
    *,
    paragraph: Paragraph,
    width: float,
    measurer: TextMeasurer,
    config: LayoutConfig,
    size: float,
) -> List[WrappedLine]:
    indent = config.spacing.bullet_indent
    glyph_width = measurer.width(BULLET_PREFIX, variant=FontVariant.REGULAR, size=size)
    text_start = indent + glyph_width
    glyph = PositionedRun(indent, BULLET_PREFIX, FontVariant.REGULAR, glyph_width)
    lines = wrap_runs(
        paragraph.runs,
        width=width,
        measurer=measurer,
        size=size,
        first_indent=text_start,
        rest_indent=text_start,
    )
    if not lines:
        return [WrappedLine(runs=(glyph,), width=text_start, indent=indent)]
    first = lines[0]
    lines[0] = WrappedLine(runs=(glyph, *first.runs), width=first.width, indent=indent)
    return lines


def single_line_width(
    runs: Sequence[StyledRun], *, measurer: TextMeasurer, size: float
) -> float:
    """Return the natural width of runs laid out on one unbounded line."""

    lines = wrap_runs(runs, width=float("inf"), measurer=measurer, size=size)
    return max((line.width for line in lines), default=0.0)
