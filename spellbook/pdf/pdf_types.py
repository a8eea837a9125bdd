"""Data structures for markup parsing, layout planning, and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple, Union

Rgb = Tuple[float, float, float]


class FontVariant(Enum):
    """Weight/slant combination of a run of text."""

    REGULAR = "regular"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"


class TextCategory(Enum):
    """Role of a piece of text; selects its font size, color and leading."""

    TITLE = "title"
    HEADER = "header"
    BODY = "body"
    TABLE_TITLE = "table_title"
    TABLE_BODY = "table_body"


class ParagraphKind(Enum):
    NORMAL = "normal"
    BULLET_ITEM = "bullet_item"
    TABLE_REFERENCE = "table_reference"


@dataclass(frozen=True, slots=True)
class StyledRun:
    """A contiguous piece of text sharing one font variant.

    Example:
        >>> StyledRun("bold", FontVariant.BOLD).variant.value
        'bold'
    """

    text: str
    variant: FontVariant = FontVariant.REGULAR


@dataclass(slots=True)
class Paragraph:
    """One unit of body text between explicit line breaks.

    Args:
        kind: Normal text, bullet item, or table reference.
        runs: Styled runs in reading order; empty for table references.
        is_first_in_block: True for the first paragraph of a content section.
        table_index: Resolved table index for table references.
    """

    kind: ParagraphKind
    runs: List[StyledRun] = field(default_factory=list)
    is_first_in_block: bool = False
    table_index: int | None = None

    def plain_text(self) -> str:
        """Return the paragraph text without styling.

        Example:
            >>> Paragraph(ParagraphKind.NORMAL, [StyledRun("a "), StyledRun("b")]).plain_text()
            'a b'
        """

        return "".join(run.text for run in self.runs)


@dataclass(frozen=True, slots=True)
class PositionedRun:
    """A run placed on a wrapped line.

    Args:
        x: Offset from the line origin in points.
        text: Run text.
        variant: Font variant of the run.
        width: Measured width in points.
    """

    x: float
    text: str
    variant: FontVariant
    width: float

    @property
    def end(self) -> float:
        return self.x + self.width


@dataclass(frozen=True, slots=True)
class WrappedLine:
    """A single wrapped line of positioned runs.

    Args:
        runs: Positioned runs; a line may mix variants.
        width: Right edge of the last run measured from the line origin.
        indent: Offset of the first run from the line origin.
    """

    runs: Tuple[PositionedRun, ...]
    width: float
    indent: float = 0.0

    def text(self) -> str:
        """Return the line text with inter-run spacing preserved."""

        return "".join(run.text for run in self.runs)


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """Final geometry of one table column.

    Args:
        x: Left edge relative to the table's left edge.
        width: Column width in points.
        centered: True when every cell in the column fits on one line.
    """

    x: float
    width: float
    centered: bool


@dataclass(frozen=True, slots=True)
class RowBlock:
    """An atomic table row with its cells already wrapped.

    Args:
        cells: Wrapped lines per column.
        line_count: Line count of the tallest cell (at least one).
        height: Vertical space the row occupies.
        is_label: True for the column label row.
        tinted: True when the alternate-row tint is drawn behind the row.
    """

    cells: Tuple[Tuple[WrappedLine, ...], ...]
    line_count: int
    height: float
    is_label: bool = False
    tinted: bool = False


@dataclass(frozen=True, slots=True)
class TableLayout:
    """Measured table ready for placement.

    Args:
        title_lines: Wrapped, centered title lines.
        columns: Column geometry shared by every row.
        label_row: Column label row, if the table has labels.
        rows: Data rows in source order.
        width: Total width spanned by the columns.
        usable_width: Width the table was laid out against.
        line_height: Leading for cell lines.
        title_line_height: Leading for title lines.
        title_gap: Space between the title block and the first row.
        row_gap: Space between consecutive rows.
    """

    title_lines: Tuple[WrappedLine, ...]
    columns: Tuple[ColumnSpec, ...]
    label_row: RowBlock | None
    rows: Tuple[RowBlock, ...]
    width: float
    usable_width: float
    line_height: float
    title_line_height: float
    title_gap: float
    row_gap: float

    def blocks(self) -> Tuple[RowBlock, ...]:
        """Return the label row (if any) followed by the data rows."""

        if self.label_row is None:
            return self.rows
        return (self.label_row, *self.rows)

    @property
    def title_height(self) -> float:
        if not self.title_lines:
            return 0.0
        height = len(self.title_lines) * self.title_line_height
        if self.blocks():
            height += self.title_gap
        return height

    @property
    def height(self) -> float:
        """Return the total height of title, labels, rows and row gaps.

        Example:
            >>> TableLayout((), (), None, (), 0.0, 0.0, 10.0, 10.0, 2.0, 2.0).height
            0.0
        """

        blocks = self.blocks()
        rows_height = sum(block.height for block in blocks)
        gaps = self.row_gap * max(len(blocks) - 1, 0)
        return self.title_height + rows_height + gaps


@dataclass(frozen=True, slots=True)
class TextDraw:
    """Draw a run of text with its baseline at (x, y).

    ``top`` and ``bottom`` bound the line band the text was placed in.
    """

    x: float
    y: float
    text: str
    variant: FontVariant
    size: float
    color: Rgb
    top: float
    bottom: float
    category: TextCategory = TextCategory.BODY


@dataclass(frozen=True, slots=True)
class TintRect:
    x: float
    y: float
    width: float
    height: float
    color: Rgb


@dataclass(frozen=True, slots=True)
class TableRowDraw:
    """Draw one table row: optional tint first, then its cell text."""

    x_min: float
    x_max: float
    top: float
    bottom: float
    texts: Tuple[TextDraw, ...]
    tint: TintRect | None = None
    is_label: bool = False


@dataclass(frozen=True, slots=True)
class ImageDraw:
    path: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class PageNumberDraw:
    x: float
    y: float
    text: str
    variant: FontVariant
    size: float
    color: Rgb


DrawCommand = Union[TextDraw, TableRowDraw, ImageDraw, PageNumberDraw]


@dataclass(frozen=True, slots=True)
class Page:
    """A sealed page of draw commands.

    Args:
        index: Zero-based page position in the document.
        number: Printed page number.
        draw_commands: Commands in drawing order.
        bookmarks: Outline titles that point at this page.
    """

    index: int
    number: int
    draw_commands: Tuple[DrawCommand, ...]
    bookmarks: Tuple[str, ...] = ()

    def text_draws(self) -> Iterator[TextDraw]:
        """Yield every text draw, including the cell text of table rows."""

        for command in self.draw_commands:
            if isinstance(command, TextDraw):
                yield command
            elif isinstance(command, TableRowDraw):
                yield from command.texts

    def text(self) -> str:
        """Return the page's body text, one placed run per line."""

        return "\n".join(draw.text for draw in self.text_draws())
