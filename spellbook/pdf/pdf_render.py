"""Forward sealed pages to a ReportLab canvas."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Sequence

from reportlab.pdfgen import canvas

from .pdf_settings import LayoutConfig
from .pdf_types import ImageDraw, Page, PageNumberDraw, TableRowDraw, TextDraw


def render_pages(
    pages: Sequence[Page],
    *,
    output: Path | BinaryIO,
    config: LayoutConfig,
    title: str | None = None,
) -> None:
    """Draw every page onto a new PDF and save it.

    Args:
        pages: Sealed pages from the layout engine.
        output: Destination path or binary file object.
        config: Layout configuration (page size and font names).
        title: Optional PDF document title metadata.
    """

    target = str(output) if isinstance(output, Path) else output
    pdf = canvas.Canvas(target, pagesize=(config.page.width, config.page.height))
    if title:
        pdf.setTitle(title)
    for page in pages:
        _draw_page(pdf=pdf, page=page, config=config)
        pdf.showPage()
    pdf.save()


def _draw_page(*, pdf: canvas.Canvas, page: Page, config: LayoutConfig) -> None:
    """Draw one page's bookmarks and commands in order.

    Args:
        pdf: Target canvas.
        page: Sealed page.
        config: Layout configuration.
    """

    for position, bookmark in enumerate(page.bookmarks):
        key = f"page-{page.index}-{position}"
        pdf.bookmarkPage(key)
        pdf.addOutlineEntry(bookmark, key, level=0)
    for command in page.draw_commands:
        if isinstance(command, ImageDraw):
            pdf.drawImage(
                command.path,
                command.x,
                command.y,
                width=command.width,
                height=command.height,
                mask="auto",
            )
        elif isinstance(command, TableRowDraw):
            _draw_row(pdf=pdf, row=command, config=config)
        else:
            _draw_text(pdf=pdf, draw=command, config=config)


def _draw_row(*, pdf: canvas.Canvas, row: TableRowDraw, config: LayoutConfig) -> None:
    if row.tint is not None:
        pdf.saveState()
        pdf.setFillColorRGB(*row.tint.color)
        pdf.rect(row.tint.x, row.tint.y, row.tint.width, row.tint.height, stroke=0, fill=1)
        pdf.restoreState()
    for text in row.texts:
        _draw_text(pdf=pdf, draw=text, config=config)


def _draw_text(
    *, pdf: canvas.Canvas, draw: TextDraw | PageNumberDraw, config: LayoutConfig
) -> None:
    pdf.saveState()
    pdf.setFont(config.fonts.name_for(draw.variant), draw.size)
    pdf.setFillColorRGB(*draw.color)
    pdf.drawString(draw.x, draw.y, draw.text)
    pdf.restoreState()
