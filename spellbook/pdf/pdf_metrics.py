"""Font metrics lookup and conversion of text widths to points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Protocol

from reportlab.pdfbase import pdfmetrics

from .pdf_settings import FontFamily, FontScalars
from .pdf_types import FontVariant


class FontMetricsError(RuntimeError):
    """Raised when a font's metrics cannot be looked up."""


class FontMetrics(Protocol):
    def measure(self, variant: FontVariant, text: str) -> float:
        """Return the width of ``text`` in font units (width at size 1)."""
        ...


@dataclass(slots=True)
class ReportLabFontMetrics:
    """Measure text with ReportLab's registered font widths.

    Example:
        >>> metrics = ReportLabFontMetrics(FontFamily())
        >>> metrics.measure(FontVariant.BOLD, "spell") > 0
        True
    """

    family: FontFamily

    def measure(self, variant: FontVariant, text: str) -> float:
        font_name = self.family.name_for(variant)
        try:
            return pdfmetrics.stringWidth(text, font_name, 1.0)
        except (KeyError, ValueError) as exc:
            raise FontMetricsError(
                f"no metrics for font {font_name!r} ({variant.value})"
            ) from exc


@dataclass(slots=True)
class TextMeasurer:
    """Memoize physical text widths for reuse during wrapping and paging.

    Args:
        metrics: Font metrics provider.
        scalars: Per-variant font-unit calibration factors.
    """

    metrics: FontMetrics
    scalars: FontScalars
    _cache: Dict[tuple[str, FontVariant, float], float] = field(default_factory=dict)

    def width(self, text: str, *, variant: FontVariant, size: float) -> float:
        """Return the width of ``text`` in points.

        Args:
            text: Text to measure.
            variant: Font variant of the text.
            size: Font size in points.
        Returns:
            Font-unit width scaled by size and the variant's scalar.
        """

        if not text:
            return 0.0
        key = (text, variant, size)
        cached = self._cache.get(key)
        if cached is None:
            units = self.metrics.measure(variant, text)
            cached = units * size * self.scalars.scalar_for(variant)
            self._cache[key] = cached
        return cached
