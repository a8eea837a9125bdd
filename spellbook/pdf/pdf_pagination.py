"""Document-wide pagination cursor that turns lines and rows into pages."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

from ..logger import get_logger
from .pdf_constants import DEBUG_PAGINATION, DESCENT_RATIO, EPSILON
from .pdf_metrics import TextMeasurer
from .pdf_settings import HSide, LayoutConfig
from .pdf_types import (
    DrawCommand,
    ImageDraw,
    Page,
    PageNumberDraw,
    RowBlock,
    TableLayout,
    TableRowDraw,
    TextCategory,
    TextDraw,
    TintRect,
    WrappedLine,
)

LOGGER = get_logger(__name__, debug=DEBUG_PAGINATION)


class CursorState(Enum):
    ACCUMULATING = "accumulating"
    SEALED = "sealed"


def _debug(*, msg: str) -> None:
    """Log a pagination trace message when DEBUG_PAGINATION is set.

    Args:
        msg: Message to log.
    """

    if DEBUG_PAGINATION:
        LOGGER.debug(msg)


class PageCursor:
    """Own the vertical position and the page under construction.

    Content is appended in document order. Whenever an item does not fit in
    the space left on the current page, that page is sealed and a fresh one
    is opened before the item is placed. Sealed pages are never touched again.

    Args:
        config: Layout configuration.
        measurer: Text width provider (used for page numbers).
    """

    def __init__(self, *, config: LayoutConfig, measurer: TextMeasurer) -> None:
        self.config = config
        self.measurer = measurer
        self.state = CursorState.SEALED
        self.y = config.content_top
        self._pages: List[Page] = []
        self._commands: List[DrawCommand] = []
        self._bookmarks: List[str] = []
        self._page_index = -1
        self._placed = False
        self._finished = False

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def has_page(self) -> bool:
        return self.state is CursorState.ACCUMULATING

    @property
    def x_min(self) -> float:
        return self.config.x_bounds(max(self._page_index, 0))[0]

    @property
    def x_max(self) -> float:
        return self.config.x_bounds(max(self._page_index, 0))[1]

    @property
    def content_width(self) -> float:
        return self.x_max - self.x_min

    def remaining(self) -> float:
        """Return the vertical space left above the content bottom."""

        return self.y - self.config.content_bottom

    def fits(self, height: float) -> bool:
        return height <= self.remaining() + EPSILON

    def start_page(self, *, bookmark: str | None = None) -> None:
        """Seal the current page (if any) and open a fresh one.

        Args:
            bookmark: Optional outline title pointing at the new page.
        """

        self._check_open()
        self._seal()
        self._page_index += 1
        self._commands = []
        self._bookmarks = [bookmark] if bookmark else []
        self._placed = False
        self.state = CursorState.ACCUMULATING
        self.y = self.config.content_top
        background = self._background()
        if background is not None:
            self._commands.append(background)
        number = self._page_number()
        if number is not None:
            self._commands.append(number)
        _debug(msg=f"page {self._page_index} opened")

    def add_bookmark(self, title: str) -> None:
        """Point an outline entry at the current page."""

        if not self.has_page:
            self.start_page()
        self._bookmarks.append(title)

    def ensure(self, height: float) -> None:
        """Open a new page unless ``height`` fits on the current one.

        An item taller than an empty page is placed there anyway.

        Args:
            height: Height of the next item.
        """

        self._check_open()
        if not self.has_page:
            self.start_page()
        elif not self.fits(height) and self._placed:
            _debug(
                msg=(
                    f"page {self._page_index} full: need {height:.2f}, "
                    f"have {self.remaining():.2f}"
                )
            )
            self.start_page()

    def advance(self, amount: float) -> None:
        """Move the cursor down by a gap; gaps are dropped at a page top.

        Args:
            amount: Vertical gap in points.
        """

        if not self.has_page or not self._placed:
            return
        self.y -= amount

    def center_vertically(self, height: float) -> None:
        """Move the cursor so a block of ``height`` is centered on the page."""

        self.ensure(height)
        if self._placed:
            return
        spare = max(self.remaining() - height, 0.0)
        self.y -= spare / 2

    def place_line(
        self,
        line: WrappedLine,
        *,
        category: TextCategory = TextCategory.BODY,
        x_offset: float = 0.0,
        center_in: float | None = None,
    ) -> None:
        """Place one wrapped line at the cursor.

        Args:
            line: Wrapped line with runs relative to the line origin.
            category: Text category that selects size, color and leading.
            x_offset: Line origin relative to the content left edge.
            center_in: Center the line within this width from the origin.
        """

        line_height = self.config.line_height(category)
        self.ensure(line_height)
        origin = self.x_min + x_offset
        if center_in is not None:
            origin += (center_in - line.width) / 2
        top = self.y
        texts = self._line_texts(
            line=line, category=category, origin=origin, top=top, line_height=line_height
        )
        self._commands.extend(texts)
        self._place(height=line_height)

    def place_lines(
        self,
        lines: Sequence[WrappedLine],
        *,
        category: TextCategory = TextCategory.BODY,
        x_offset: float = 0.0,
        center_in: float | None = None,
    ) -> None:
        for line in lines:
            self.place_line(line, category=category, x_offset=x_offset, center_in=center_in)

    def blank_line(self, category: TextCategory = TextCategory.BODY) -> None:
        """Advance by one empty line of ``category``."""

        self.advance(self.config.line_height(category))

    def place_table(self, layout: TableLayout) -> None:
        """Place a measured table, breaking pages between rows only.

        A table that fits on a fresh page but not in the space left is moved to
        the next page whole. A table taller than a page starts where the cursor
        is and continues row by row; the label row is repeated on continuation
        pages when ``repeat_header`` is enabled.

        Args:
            layout: Output of ``layout_table``.
        """

        self._check_open()
        if not self.has_page:
            self.start_page()
        height = layout.height
        fits_page = height <= self.config.content_height + EPSILON
        if not self.fits(height) and fits_page and self._placed:
            _debug(msg=f"table of height {height:.2f} moved to a new page")
            self.start_page()
        inset = self.config.table.outer_horizontal_margin
        self.place_lines(
            layout.title_lines,
            category=TextCategory.TABLE_TITLE,
            x_offset=inset,
            center_in=layout.usable_width,
        )
        if layout.title_lines and layout.blocks():
            self.advance(layout.title_gap)
        for position, row in enumerate(layout.blocks()):
            if position:
                self.advance(layout.row_gap)
            if not self.fits(row.height) and self._placed:
                self.start_page()
                if self.config.table.repeat_header and layout.label_row is not None:
                    if not row.is_label:
                        self._place_row(row=layout.label_row, layout=layout)
                        self.advance(layout.row_gap)
            self._place_row(row=row, layout=layout)

    def finish(self) -> List[Page]:
        """Seal the last page and return every page in order.

        Returns:
            Sealed pages; the cursor accepts no further content.
        """

        self._check_open()
        self._seal()
        self._finished = True
        return list(self._pages)

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError("pagination cursor is finished; no more content accepted")

    def _seal(self) -> None:
        if self.state is not CursorState.ACCUMULATING:
            return
        self._pages.append(
            Page(
                index=self._page_index,
                number=self.config.page_number.starting_num + self._page_index,
                draw_commands=tuple(self._commands),
                bookmarks=tuple(self._bookmarks),
            )
        )
        self.state = CursorState.SEALED
        _debug(msg=f"page {self._page_index} sealed with {len(self._commands)} commands")

    def _place(self, *, height: float) -> None:
        self.y -= height
        self._placed = True

    def _line_texts(
        self,
        *,
        line: WrappedLine,
        category: TextCategory,
        origin: float,
        top: float,
        line_height: float,
    ) -> List[TextDraw]:
        size = self.config.font_size(category)
        bottom = top - line_height
        baseline = bottom + DESCENT_RATIO * size
        color = self.config.color(category)
        return [
            TextDraw(
                x=origin + run.x,
                y=baseline,
                text=run.text,
                variant=run.variant,
                size=size,
                color=color,
                top=top,
                bottom=bottom,
                category=category,
            )
            for run in line.runs
        ]

    def _place_row(self, *, row: RowBlock, layout: TableLayout) -> None:
        """Append one atomic table row at the cursor.

        Args:
            row: Wrapped row block.
            layout: Owning table layout.
        """

        self.ensure(row.height)
        left = self.x_min + (self.content_width - layout.width) / 2
        top = self.y
        bottom = top - row.height
        texts: List[TextDraw] = []
        for column, lines in zip(layout.columns, row.cells):
            for number, line in enumerate(lines):
                origin = left + column.x
                if column.centered:
                    origin += (column.width - line.width) / 2
                texts.extend(
                    self._line_texts(
                        line=line,
                        category=TextCategory.TABLE_BODY,
                        origin=origin,
                        top=top - number * layout.line_height,
                        line_height=layout.line_height,
                    )
                )
        self._commands.append(
            TableRowDraw(
                x_min=left,
                x_max=left + layout.width,
                top=top,
                bottom=bottom,
                texts=tuple(texts),
                tint=self._tint(row=row, layout=layout, left=left, bottom=bottom),
                is_label=row.is_label,
            )
        )
        self._place(height=row.height)

    def _tint(
        self, *, row: RowBlock, layout: TableLayout, left: float, bottom: float
    ) -> TintRect | None:
        color = self.config.table.off_row_color
        if not row.tinted or color is None:
            return None
        options = self.config.table
        height = row.height * options.off_row_height_scalar
        y = bottom + (row.height - height) / 2
        y -= options.off_row_y_adjust_scalar * layout.line_height
        red, green, blue = color.rgb()
        return TintRect(
            x=left,
            y=y,
            width=layout.width,
            height=height,
            color=(float(red), float(green), float(blue)),
        )

    def _background(self) -> ImageDraw | None:
        image = self.config.background
        if image is None:
            return None
        page = self.config.page
        return ImageDraw(
            path=image.path,
            x=image.x,
            y=image.y,
            width=image.width if image.width is not None else page.width,
            height=image.height if image.height is not None else page.height,
        )

    def _page_number(self) -> PageNumberDraw | None:
        """Return the page number draw for the current page, if enabled."""

        options = self.config.page_number
        if not options.enabled:
            return None
        text = str(options.starting_num + self._page_index)
        width = self.measurer.width(text, variant=options.font_variant, size=options.font_size)
        if options.side_for(self._page_index) is HSide.LEFT:
            x = options.side_margin
        else:
            x = self.config.page.width - options.side_margin - width
        red, green, blue = options.color.rgb()
        return PageNumberDraw(
            x=x,
            y=options.bottom_margin,
            text=text,
            variant=options.font_variant,
            size=options.font_size,
            color=(float(red), float(green), float(blue)),
        )
