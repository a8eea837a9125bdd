"""Line wrapping and indentation."""

import pytest

from spellbook.pdf.pdf_constants import EPSILON
from spellbook.pdf.pdf_runs import parse_markup
from spellbook.pdf.pdf_types import FontVariant, PositionedRun, StyledRun, WrappedLine
from spellbook.pdf.pdf_wrap import (
    single_line_width,
    split_words,
    wrap_paragraph,
    wrap_runs,
)

R = FontVariant.REGULAR
B = FontVariant.BOLD

TEXT = "Alpha beta gamma delta <b>epsilon<r> zeta eta theta iota kappa lambda"


def test_breaks_before_overflowing_word(measurer):
    lines = wrap_runs([StyledRun("aaa bbb ccc")], width=35, measurer=measurer, size=10)
    assert [line.text() for line in lines] == ["aaa bbb", "ccc"]
    assert lines[0].width == pytest.approx(35)


@pytest.mark.parametrize("width", [20.0, 37.0, 50.0, 80.0, 160.0])
def test_no_line_exceeds_width_except_lone_words(measurer, width):
    (paragraph,) = parse_markup(TEXT)
    lines = wrap_runs(paragraph.runs, width=width, measurer=measurer, size=10)
    assert lines
    for line in lines:
        lone_word = " " not in line.text()
        assert line.width <= width + EPSILON or lone_word


def test_wrapping_preserves_words_in_order(measurer):
    (paragraph,) = parse_markup(TEXT)
    lines = wrap_runs(paragraph.runs, width=50, measurer=measurer, size=10)
    assert " ".join(line.text() for line in lines) == paragraph.plain_text()


def test_oversized_word_sits_alone(measurer):
    lines = wrap_runs(
        [StyledRun("a extraordinarily b")], width=30, measurer=measurer, size=10
    )
    assert [line.text() for line in lines] == ["a", "extraordinarily", "b"]
    assert lines[1].width == pytest.approx(75)


def test_mixed_variants_measure_per_run(measurer):
    lines = wrap_runs(
        [StyledRun("ab "), StyledRun("cd", B)], width=100, measurer=measurer, size=10
    )
    assert len(lines) == 1
    first, second = lines[0].runs
    assert (first.text, first.variant, first.x, first.width) == ("ab ", R, 0.0, 15.0)
    assert (second.text, second.variant) == ("cd", B)
    assert second.x == pytest.approx(15)
    assert second.width == pytest.approx(12)
    assert lines[0].width == pytest.approx(27)


def test_word_spanning_variants_is_not_split(measurer):
    words = split_words([StyledRun("x bo"), StyledRun("ld y", B)])
    assert [[piece.text for piece in word.pieces] for word in words] == [
        ["x"],
        ["bo", "ld"],
        ["y"],
    ]
    lines = wrap_runs(
        [StyledRun("x bo"), StyledRun("ld y", B)], width=30, measurer=measurer, size=10
    )
    assert [line.text() for line in lines] == ["x", "bold", "y"]


def test_first_paragraph_flush_others_tabbed(measurer, config):
    first, second = parse_markup(
        "one two three four five six\nseven eight nine ten eleven twelve"
    )
    first_lines = wrap_paragraph(first, width=60, measurer=measurer, config=config)
    second_lines = wrap_paragraph(second, width=60, measurer=measurer, config=config)
    assert [line.runs[0].x for line in first_lines] == [0.0] * len(first_lines)
    assert second_lines[0].runs[0].x == pytest.approx(10)
    assert len(second_lines) > 1
    assert all(line.runs[0].x == 0.0 for line in second_lines[1:])


def test_bullet_glyph_and_hanging_indent(measurer, config):
    (paragraph,) = parse_markup("- alpha beta gamma delta")
    lines = wrap_paragraph(paragraph, width=60, measurer=measurer, config=config)
    assert lines[0].runs[0] == PositionedRun(4.0, "• ", R, 10.0)
    assert lines[0].runs[1].x == pytest.approx(14)
    assert len(lines) > 1
    assert all(line.runs[0].x == pytest.approx(14) for line in lines[1:])


def test_empty_bullet_still_draws_glyph(measurer, config):
    (paragraph,) = parse_markup("-")
    lines = wrap_paragraph(paragraph, width=60, measurer=measurer, config=config)
    assert lines == [
        WrappedLine(runs=(PositionedRun(4.0, "• ", R, 10.0),), width=14.0, indent=4.0)
    ]


def test_empty_paragraph_has_no_lines(measurer, config):
    paragraphs = parse_markup("a\n\nb")
    assert wrap_paragraph(paragraphs[1], width=60, measurer=measurer, config=config) == []


def test_single_line_width(measurer):
    assert single_line_width([StyledRun("ab cd")], measurer=measurer, size=10) == 25.0
    assert single_line_width([], measurer=measurer, size=10) == 0.0
