"""Fonts, colors, and layout settings for spellbook generation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .pdf_constants import EPSILON
from .pdf_types import FontVariant, Rgb, TextCategory


class ConfigError(ValueError):
    """Raised when a layout option violates its constraint.

    Example:
        >>> str(ConfigError("page.width", "must be > 0"))
        'page.width: must be > 0'
    """

    def __init__(self, field_name: str, constraint: str) -> None:
        super().__init__(f"{field_name}: {constraint}")
        self.field = field_name
        self.constraint = constraint


class HSide(Enum):
    LEFT = "left"
    RIGHT = "right"

    def flipped(self) -> HSide:
        return HSide.RIGHT if self is HSide.LEFT else HSide.LEFT


def _require_positive(*, name: str, value: float) -> None:
    if not value > 0:
        raise ConfigError(name, "must be > 0")


def _require_non_negative(*, name: str, value: float) -> None:
    if not value >= 0:
        raise ConfigError(name, "must be >= 0")


def _require_bool(*, name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ConfigError(name, "must be true or false")


@dataclass(frozen=True, slots=True)
class PageOptions:
    """Page geometry in points.

    Example:
        >>> page = PageOptions()
        >>> page.content_width > 0
        True
    """

    width: float = letter[0]
    height: float = letter[1]
    margin_left: float = 0.75 * inch
    margin_right: float = 0.75 * inch
    margin_top: float = 0.75 * inch
    margin_bottom: float = 0.75 * inch
    mirror_margins: bool = False

    def __post_init__(self) -> None:
        _require_positive(name="page.width", value=self.width)
        _require_bool(name="page.mirror_margins", value=self.mirror_margins)
        _require_positive(name="page.height", value=self.height)
        for side in ("left", "right", "top", "bottom"):
            _require_non_negative(
                name=f"page.margin_{side}", value=getattr(self, f"margin_{side}")
            )
        if self.margin_left + self.margin_right >= self.width:
            raise ConfigError("page.margin_left", "left + right margins must be < width")
        if self.margin_top + self.margin_bottom >= self.height:
            raise ConfigError("page.margin_top", "top + bottom margins must be < height")

    @property
    def content_width(self) -> float:
        """Return the width available for content inside margins."""

        return self.width - self.margin_left - self.margin_right

    def horizontal_margins(self, page_index: int) -> tuple[float, float]:
        """Return (left, right) margins for a page, honoring mirroring.

        Args:
            page_index: Zero-based page index.
        Returns:
            Tuple of (left, right) margins in points.
        """

        if self.mirror_margins and page_index % 2 == 1:
            return self.margin_right, self.margin_left
        return self.margin_left, self.margin_right


@dataclass(frozen=True, slots=True)
class FontSizes:
    title: float = 28.0
    header: float = 16.0
    body: float = 11.0
    table_title: float = 11.0
    table_body: float = 10.0

    def __post_init__(self) -> None:
        for item in fields(self):
            _require_positive(
                name=f"font_sizes.{item.name}", value=getattr(self, item.name)
            )

    def size_for(self, category: TextCategory) -> float:
        return getattr(self, category.value)


@dataclass(frozen=True, slots=True)
class FontScalars:
    """Calibration factors from font units to points, per variant."""

    regular: float = 1.0
    bold: float = 1.0
    italic: float = 1.0
    bold_italic: float = 1.0

    def __post_init__(self) -> None:
        for item in fields(self):
            _require_positive(name=f"scalars.{item.name}", value=getattr(self, item.name))

    def scalar_for(self, variant: FontVariant) -> float:
        return getattr(self, variant.value)


@dataclass(frozen=True, slots=True)
class FontFamily:
    """ReportLab font names per variant, with optional TrueType sources.

    The defaults are the built-in Times faces, which need no registration.
    """

    regular: str = "Times-Roman"
    bold: str = "Times-Bold"
    italic: str = "Times-Italic"
    bold_italic: str = "Times-BoldItalic"
    regular_path: str | None = None
    bold_path: str | None = None
    italic_path: str | None = None
    bold_italic_path: str | None = None

    def __post_init__(self) -> None:
        for variant in FontVariant:
            if not getattr(self, variant.value):
                raise ConfigError(f"fonts.{variant.value}", "must be a font name")

    def name_for(self, variant: FontVariant) -> str:
        return getattr(self, variant.value)

    def path_for(self, variant: FontVariant) -> str | None:
        return getattr(self, f"{variant.value}_path")


@dataclass(frozen=True, slots=True)
class SpacingOptions:
    """Vertical and horizontal spacing.

    Args:
        line_height: Leading as a multiple of the category font size.
        paragraph_gap: Extra space entering and leaving a bullet group, and
            before a table.
        tab_indent: First-line indent of every paragraph after the first.
        bullet_indent: Offset of the bullet glyph from the left margin.
        header_gap: Space after a record's header and field blocks.
        record_gap: Space between records that share a page.
    """

    line_height: float = 1.2
    paragraph_gap: float = 6.0
    tab_indent: float = 18.0
    bullet_indent: float = 0.0
    header_gap: float = 6.0
    record_gap: float = 18.0

    def __post_init__(self) -> None:
        _require_positive(name="spacing.line_height", value=self.line_height)
        for item in fields(self):
            _require_non_negative(
                name=f"spacing.{item.name}", value=getattr(self, item.name)
            )


@dataclass(frozen=True, slots=True)
class TextColors:
    title: colors.Color = colors.black
    header: colors.Color = colors.black
    body: colors.Color = colors.black
    table_title: colors.Color = colors.black
    table_body: colors.Color = colors.black

    def rgb_for(self, category: TextCategory) -> Rgb:
        return _rgb(getattr(self, category.value))


@dataclass(frozen=True, slots=True)
class TableOptions:
    """Table geometry and styling.

    Args:
        horizontal_cell_margin: Gap between adjacent columns.
        vertical_cell_margin: Gap between adjacent rows.
        outer_horizontal_margin: Inset of the table from each content edge.
        outer_vertical_margin: Space after a table.
        title_gap: Space between the title block and the first row.
        min_column_width: Narrowest width a column is given.
        font_scale: Multiplier applied to the table font sizes.
        off_row_color: Tint behind alternate data rows; None disables it.
        off_row_height_scalar: Tint height as a fraction of the row height.
        off_row_y_adjust_scalar: Downward tint shift in cell line heights.
        repeat_header: Repeat the label row on continuation pages.
    """

    horizontal_cell_margin: float = 8.0
    vertical_cell_margin: float = 2.0
    outer_horizontal_margin: float = 12.0
    outer_vertical_margin: float = 8.0
    title_gap: float = 2.0
    min_column_width: float = 0.0
    font_scale: float = 1.0
    off_row_color: colors.Color | None = colors.Color(0.92, 0.92, 0.92)
    off_row_height_scalar: float = 1.0
    off_row_y_adjust_scalar: float = 0.0
    repeat_header: bool = False

    def __post_init__(self) -> None:
        _require_positive(name="table.font_scale", value=self.font_scale)
        _require_bool(name="table.repeat_header", value=self.repeat_header)
        for name in (
            "horizontal_cell_margin",
            "vertical_cell_margin",
            "outer_horizontal_margin",
            "outer_vertical_margin",
            "title_gap",
            "min_column_width",
            "off_row_height_scalar",
            "off_row_y_adjust_scalar",
        ):
            _require_non_negative(name=f"table.{name}", value=getattr(self, name))


@dataclass(frozen=True, slots=True)
class PageNumberOptions:
    """Placement and style of printed page numbers.

    Args:
        enabled: Draw page numbers at all.
        starting_side: Side of the first page's number.
        flips_sides: Alternate the side on every page, like a bound book.
        starting_num: Number printed on the first page.
        font_variant: Variant used for the number.
        font_size: Size used for the number.
        color: Fill color of the number.
        side_margin: Distance from the page's side edge.
        bottom_margin: Baseline distance from the page's bottom edge.
        reserved_band: Extra space kept free above the bottom margin.
    """

    enabled: bool = True
    starting_side: HSide = HSide.RIGHT
    flips_sides: bool = True
    starting_num: int = 1
    font_variant: FontVariant = FontVariant.REGULAR
    font_size: float = 10.0
    color: colors.Color = colors.black
    side_margin: float = 0.5 * inch
    bottom_margin: float = 0.4 * inch
    reserved_band: float = 0.0

    def __post_init__(self) -> None:
        _require_positive(name="page_number.font_size", value=self.font_size)
        _require_bool(name="page_number.enabled", value=self.enabled)
        _require_bool(name="page_number.flips_sides", value=self.flips_sides)
        if isinstance(self.starting_num, bool) or not isinstance(self.starting_num, int):
            raise ConfigError("page_number.starting_num", "must be an integer")
        for name in ("side_margin", "bottom_margin", "reserved_band"):
            _require_non_negative(name=f"page_number.{name}", value=getattr(self, name))

    def side_for(self, page_index: int) -> HSide:
        """Return the side the number is drawn on for a page.

        Example:
            >>> PageNumberOptions(starting_side=HSide.LEFT).side_for(1)
            <HSide.RIGHT: 'right'>
        """

        if self.flips_sides and page_index % 2 == 1:
            return self.starting_side.flipped()
        return self.starting_side


@dataclass(frozen=True, slots=True)
class BackgroundImage:
    """Image drawn behind every page; width/height default to the page size."""

    path: str
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ConfigError("background.path", "must be a file path")
        if self.width is not None:
            _require_positive(name="background.width", value=self.width)
        if self.height is not None:
            _require_positive(name="background.height", value=self.height)


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Every option consumed by the layout engine, fixed for a document.

    Example:
        >>> config = LayoutConfig()
        >>> config.line_height(TextCategory.BODY) > config.font_size(TextCategory.BODY)
        True
    """

    page: PageOptions = field(default_factory=PageOptions)
    font_sizes: FontSizes = field(default_factory=FontSizes)
    scalars: FontScalars = field(default_factory=FontScalars)
    fonts: FontFamily = field(default_factory=FontFamily)
    spacing: SpacingOptions = field(default_factory=SpacingOptions)
    colors: TextColors = field(default_factory=TextColors)
    table: TableOptions = field(default_factory=TableOptions)
    page_number: PageNumberOptions = field(default_factory=PageNumberOptions)
    background: BackgroundImage | None = None
    record_starts_new_page: bool = True

    def __post_init__(self) -> None:
        _require_bool(name="record_starts_new_page", value=self.record_starts_new_page)
        if self.content_height <= 0:
            raise ConfigError(
                "page_number.reserved_band",
                "reserved band must leave room between the page margins",
            )

    def font_size(self, category: TextCategory) -> float:
        size = self.font_sizes.size_for(category)
        if category in (TextCategory.TABLE_TITLE, TextCategory.TABLE_BODY):
            return size * self.table.font_scale
        return size

    def line_height(self, category: TextCategory) -> float:
        return self.spacing.line_height * self.font_size(category)

    def color(self, category: TextCategory) -> Rgb:
        return self.colors.rgb_for(category)

    @property
    def content_top(self) -> float:
        return self.page.height - self.page.margin_top

    @property
    def content_bottom(self) -> float:
        """Return the lowest y content may reach, above any page-number band."""

        if self.page_number.enabled:
            return self.page.margin_bottom + self.page_number.reserved_band
        return self.page.margin_bottom

    @property
    def content_height(self) -> float:
        return self.content_top - self.content_bottom + EPSILON

    def x_bounds(self, page_index: int) -> tuple[float, float]:
        """Return the (x_min, x_max) content edges for a page.

        Args:
            page_index: Zero-based page index.
        Returns:
            Tuple of left and right content edges in points.
        """

        left, right = self.page.horizontal_margins(page_index)
        return left, self.page.width - right


def register_fonts(family: FontFamily) -> None:
    """Register any TrueType faces of a font family with ReportLab.

    Faces without a path are assumed to be built-in or already registered.

    Args:
        family: Font family to register.
    """

    registered = set(pdfmetrics.getRegisteredFontNames())
    for variant in FontVariant:
        path = family.path_for(variant)
        name = family.name_for(variant)
        if path is None or name in registered:
            continue
        pdfmetrics.registerFont(TTFont(name, path))
    if family.regular_path is not None:
        pdfmetrics.registerFontFamily(
            family.regular,
            normal=family.regular,
            bold=family.bold,
            italic=family.italic,
            boldItalic=family.bold_italic,
        )


_GROUPS: Dict[str, type] = {
    "page": PageOptions,
    "font_sizes": FontSizes,
    "scalars": FontScalars,
    "fonts": FontFamily,
    "spacing": SpacingOptions,
    "colors": TextColors,
    "table": TableOptions,
    "page_number": PageNumberOptions,
    "background": BackgroundImage,
}
_COLOR_FIELDS = {
    "colors.title",
    "colors.header",
    "colors.body",
    "colors.table_title",
    "colors.table_body",
    "table.off_row_color",
    "page_number.color",
}


def load_config(path: Path) -> LayoutConfig:
    """Read a LayoutConfig from a JSON file.

    Args:
        path: JSON file whose top-level keys name option groups.
    Returns:
        Validated LayoutConfig.
    """

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ConfigError("<root>", "must be a JSON object")
    return config_from_dict(data)


def config_from_dict(data: Mapping[str, Any]) -> LayoutConfig:
    """Build a LayoutConfig from plain data.

    Example:
        >>> config_from_dict({"page": {"width": 400}}).page.width
        400
    """

    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "record_starts_new_page":
            kwargs[key] = value
            continue
        group = _GROUPS.get(key)
        if group is None:
            raise ConfigError(key, "unknown option")
        if key == "background" and value is None:
            kwargs[key] = None
            continue
        if not isinstance(value, Mapping):
            raise ConfigError(key, "must be an object")
        kwargs[key] = _group_from_dict(group=group, prefix=key, data=value)
    return LayoutConfig(**kwargs)


def _group_from_dict(*, group: type, prefix: str, data: Mapping[str, Any]) -> Any:
    """Instantiate one option group, converting colors and enums.

    Args:
        group: Option dataclass.
        prefix: Group key used in error messages.
        data: Raw option values.
    Returns:
        The option group instance.
    """

    names = {item.name for item in fields(group)}
    values: Dict[str, Any] = {}
    for name, raw in data.items():
        qualified = f"{prefix}.{name}"
        if name not in names:
            raise ConfigError(qualified, "unknown option")
        values[name] = _coerce_value(qualified=qualified, raw=raw)
    try:
        return group(**values)
    except TypeError as exc:
        raise ConfigError(prefix, str(exc)) from exc


def _coerce_value(*, qualified: str, raw: Any) -> Any:
    if qualified in _COLOR_FIELDS:
        if raw is None and qualified == "table.off_row_color":
            return None
        return _parse_color(qualified=qualified, raw=raw)
    if qualified == "page_number.starting_side":
        return _parse_enum(qualified=qualified, enum=HSide, raw=raw)
    if qualified == "page_number.font_variant":
        return _parse_enum(qualified=qualified, enum=FontVariant, raw=raw)
    return raw


def _parse_enum(*, qualified: str, enum: type[Enum], raw: Any) -> Enum:
    try:
        return enum(str(raw).lower())
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum)
        raise ConfigError(qualified, f"must be one of {choices}") from exc


def _parse_color(*, qualified: str, raw: Any) -> colors.Color:
    """Return a Color from ``"#RRGGBB"`` or an ``[r, g, b]`` list of 0-255 ints.

    Example:
        >>> _parse_color(qualified="colors.body", raw=[255, 0, 0]).rgb()
        (1.0, 0.0, 0.0)
    """

    if isinstance(raw, str):
        try:
            return colors.HexColor(raw)
        except ValueError as exc:
            raise ConfigError(qualified, "must be a #RRGGBB color") from exc
    if isinstance(raw, (list, tuple)) and len(raw) == 3:
        if all(isinstance(part, (int, float)) and 0 <= part <= 255 for part in raw):
            return colors.Color(raw[0] / 255, raw[1] / 255, raw[2] / 255)
    raise ConfigError(qualified, "must be a #RRGGBB string or [r, g, b] list")


def _rgb(color: colors.Color) -> Rgb:
    red, green, blue = color.rgb()
    return (float(red), float(green), float(blue))
