"""Shared fixtures: a deterministic metrics provider and a small page."""

from __future__ import annotations

from typing import Dict

import pytest

from spellbook.models import ContentRecord, Table
from spellbook.pdf.pdf_metrics import TextMeasurer
from spellbook.pdf.pdf_settings import (
    FontSizes,
    LayoutConfig,
    PageNumberOptions,
    PageOptions,
    SpacingOptions,
    TableOptions,
)
from spellbook.pdf.pdf_types import FontVariant


class FixedWidthMetrics:
    """Every character advances a fixed fraction of the em, per variant."""

    ADVANCES: Dict[FontVariant, float] = {
        FontVariant.REGULAR: 0.5,
        FontVariant.BOLD: 0.6,
        FontVariant.ITALIC: 0.5,
        FontVariant.BOLD_ITALIC: 0.6,
    }

    def __init__(self) -> None:
        self.calls = 0

    def measure(self, variant: FontVariant, text: str) -> float:
        self.calls += 1
        return len(text) * self.ADVANCES[variant]


def small_config(**overrides) -> LayoutConfig:
    """Return a 200x300 page with 20pt margins and 10pt body text.

    Body lines are 10pt tall, the content area is 160pt wide and 260pt tall,
    and a regular character is 5pt wide (6pt bold).
    """

    options = dict(
        page=PageOptions(
            width=200,
            height=300,
            margin_left=20,
            margin_right=20,
            margin_top=20,
            margin_bottom=20,
        ),
        font_sizes=FontSizes(title=20, header=15, body=10, table_title=10, table_body=10),
        spacing=SpacingOptions(
            line_height=1.0,
            paragraph_gap=6,
            tab_indent=10,
            bullet_indent=4,
            header_gap=6,
            record_gap=12,
        ),
        table=TableOptions(
            horizontal_cell_margin=4,
            vertical_cell_margin=2,
            outer_horizontal_margin=0,
            outer_vertical_margin=4,
            title_gap=2,
        ),
        page_number=PageNumberOptions(font_size=8, side_margin=10, bottom_margin=8),
    )
    options.update(overrides)
    return LayoutConfig(**options)


@pytest.fixture
def metrics() -> FixedWidthMetrics:
    return FixedWidthMetrics()


@pytest.fixture
def config() -> LayoutConfig:
    return small_config()


@pytest.fixture
def measurer(metrics: FixedWidthMetrics, config: LayoutConfig) -> TextMeasurer:
    return TextMeasurer(metrics=metrics, scalars=config.scalars)


@pytest.fixture
def dice_table() -> Table:
    return Table(
        title="Wild Magic",
        column_labels=["d", "Effect"],
        rows=[["1", "Fire"], ["2", "Ice"]],
    )


@pytest.fixture
def sample_record() -> ContentRecord:
    return ContentRecord(
        title="Sample",
        body="Intro paragraph.\n- item one\n- item two\nClosing <b>bold<r> text.",
    )


@pytest.fixture
def make_config():
    return small_config
