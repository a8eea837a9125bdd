"""PDF generation for spellbook content records."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..models import ContentRecord
from .pdf_document import layout_document
from .pdf_metrics import FontMetrics, ReportLabFontMetrics
from .pdf_render import render_pages
from .pdf_settings import LayoutConfig, register_fonts
from .pdf_types import Page

__all__ = [
    "LayoutConfig",
    "build_pdf",
    "layout_document",
    "render_pages",
]


def build_pdf(
    records: Sequence[ContentRecord],
    *,
    output_path: Path,
    config: LayoutConfig | None = None,
    title: str | None = None,
    metrics: FontMetrics | None = None,
    show_progress: bool = True,
) -> List[Page]:
    """Lay out records and write them to a PDF.

    Args:
        records: Content records in book order.
        output_path: Destination PDF path; parent directories are created.
        config: Layout configuration; defaults to ``LayoutConfig()``.
        title: Optional document title for the title page and metadata.
        metrics: Font metrics provider; defaults to ReportLab's font widths.
        show_progress: Show a progress bar while laying out records.
    Returns:
        The pages that were rendered.

    Example:
        >>> build_pdf([], output_path=Path("output/empty.pdf"))  # doctest: +SKIP
        []
    """

    config = config or LayoutConfig()
    register_fonts(config.fonts)
    if metrics is None:
        metrics = ReportLabFontMetrics(family=config.fonts)
    pages = layout_document(
        records,
        config=config,
        metrics=metrics,
        title=title,
        show_progress=show_progress,
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    render_pages(pages, output=output_path, config=config, title=title)
    return pages
