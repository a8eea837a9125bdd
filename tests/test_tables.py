"""Column widths, alignment and row blocks."""

from dataclasses import replace

import pytest

from spellbook.models import Table
from spellbook.pdf.pdf_settings import TableOptions
from spellbook.pdf.pdf_tables import column_widths, layout_table
from spellbook.pdf.pdf_types import FontVariant


def test_narrow_columns_donate_slack():
    assert column_widths([10.0, 200.0], usable=200.0, gap=0.0) == [10.0, 190.0]


def test_all_narrow_columns_keep_natural_width():
    assert column_widths([30.0, 30.0, 30.0], usable=200.0, gap=4.0) == [30.0, 30.0, 30.0]


def test_minimum_column_width():
    assert column_widths([5.0, 500.0], usable=100.0, gap=0.0, minimum=20.0) == [20.0, 80.0]


def test_wide_columns_share_evenly():
    widths = column_widths([300.0, 400.0], usable=200.0, gap=10.0)
    assert widths == [95.0, 95.0]


def test_no_columns():
    assert column_widths([], usable=100.0, gap=4.0) == []


def test_short_columns_are_centered(measurer, config, dice_table):
    layout = layout_table(dice_table, width=160, measurer=measurer, config=config)
    assert [column.centered for column in layout.columns] == [True, True]
    assert [column.width for column in layout.columns] == pytest.approx([6.0, 36.0])
    assert layout.width == pytest.approx(46)
    assert [column.x for column in layout.columns] == pytest.approx([0.0, 10.0])


def test_one_multiline_cell_left_aligns_whole_column(measurer, config):
    table = Table(
        column_labels=["d", "Effect"],
        rows=[["1", "a very long description of the effect that wraps around"], ["2", "Ice"]],
    )
    layout = layout_table(table, width=160, measurer=measurer, config=config)
    assert layout.columns[0].centered is True
    assert layout.columns[1].centered is False
    first = layout.rows[0]
    assert first.line_count == len(first.cells[1]) > 1
    assert first.height == pytest.approx(first.line_count * 10)
    assert layout.rows[1].line_count == 1


def test_labels_bold_cells_regular(measurer, config, dice_table):
    layout = layout_table(dice_table, width=160, measurer=measurer, config=config)
    assert layout.label_row is not None and layout.label_row.is_label
    assert layout.label_row.cells[1][0].runs[0].variant is FontVariant.BOLD
    assert layout.rows[0].cells[1][0].runs[0].variant is FontVariant.REGULAR
    assert layout.title_lines[0].runs[0].variant is FontVariant.BOLD


def test_cell_markup_is_honored(measurer, config):
    table = Table(rows=[["<i>slow", "fast"]])
    layout = layout_table(table, width=160, measurer=measurer, config=config)
    assert layout.rows[0].cells[0][0].runs[0].variant is FontVariant.ITALIC


def test_jagged_rows_are_padded(measurer, config):
    table = Table(rows=[["a", "b", "c"], ["d"]])
    layout = layout_table(table, width=160, measurer=measurer, config=config)
    assert len(layout.columns) == 3
    assert layout.label_row is None
    assert layout.rows[1].cells[1:] == ((), ())
    assert layout.rows[1].line_count == 1


def test_alternate_rows_are_tinted(measurer, config):
    table = Table(column_labels=["x"], rows=[["1"], ["2"], ["3"]])
    layout = layout_table(table, width=160, measurer=measurer, config=config)
    assert [row.tinted for row in layout.rows] == [True, False, True]
    assert layout.label_row is not None and not layout.label_row.tinted


def test_tint_starts_on_second_row_without_labels(measurer, config):
    table = Table(rows=[["1"], ["2"], ["3"], ["4"]])
    layout = layout_table(table, width=160, measurer=measurer, config=config)
    assert [row.tinted for row in layout.rows] == [False, True, False, True]


def test_tint_can_be_disabled(measurer, config):
    plain = replace(config, table=TableOptions(off_row_color=None))
    table = Table(rows=[["1"], ["2"]])
    layout = layout_table(table, width=160, measurer=measurer, config=plain)
    assert [row.tinted for row in layout.rows] == [False, False]


def test_table_height(measurer, config, dice_table):
    layout = layout_table(dice_table, width=160, measurer=measurer, config=config)
    # title, title gap, label row, two data rows, two row gaps
    assert layout.height == pytest.approx(10 + 2 + 10 + 20 + 2 * 2)


def test_outer_margin_narrows_usable_width(measurer, config):
    inset = replace(config, table=TableOptions(outer_horizontal_margin=20, horizontal_cell_margin=0))
    table = Table(rows=[["x" * 100]])
    layout = layout_table(table, width=160, measurer=measurer, config=inset)
    assert layout.usable_width == pytest.approx(120)
    assert layout.columns[0].width == pytest.approx(120)
