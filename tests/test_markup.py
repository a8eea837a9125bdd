"""Tokenizer and run builder behavior."""

import pytest

from spellbook.pdf.pdf_markup import TokenKind, tokenize
from spellbook.pdf.pdf_runs import parse_markup, runs_for_cell
from spellbook.pdf.pdf_types import FontVariant, ParagraphKind, StyledRun

R = FontVariant.REGULAR
B = FontVariant.BOLD
I = FontVariant.ITALIC
BI = FontVariant.BOLD_ITALIC


def _runs(paragraph):
    return [(run.text, run.variant) for run in paragraph.runs]


@pytest.mark.parametrize(
    "tag, variant",
    [("<r>", R), ("<b>", B), ("<i>", I), ("<bi>", BI), ("<ib>", BI)],
)
def test_style_tags_switch_variant(tag, variant):
    (paragraph,) = parse_markup(f"{tag}word")
    assert paragraph.runs == [StyledRun("word", variant)]


def test_tags_are_case_sensitive():
    (paragraph,) = parse_markup("<B>word")
    assert _runs(paragraph) == [("<B>word", R)]


@pytest.mark.parametrize(
    "body, expected",
    [
        (r"a <b>b", [("a ", R), ("b", B)]),
        (r"a \<b>b", [("a <b>b", R)]),
        (r"a \\<b>b", [("a \\", R), ("b", B)]),
        (r"a \\\<b>b", [("a \\<b>b", R)]),
        (r"a \\\\<b>b", [("a \\\\", R), ("b", B)]),
    ],
)
def test_escape_count_rule(body, expected):
    (paragraph,) = parse_markup(body)
    assert _runs(paragraph) == expected


def test_escaped_tag_leaves_variant_unchanged():
    (paragraph,) = parse_markup(r"<i>x \<b>y z")
    assert _runs(paragraph) == [("x <b>y z", I)]


def test_backslash_without_tag_is_literal():
    (paragraph,) = parse_markup(r"C:\path a\b")
    assert _runs(paragraph) == [(r"C:\path a\b", R)]


def test_table_reference_in_range_resolves():
    (paragraph,) = parse_markup("[table][0]", table_count=1)
    assert paragraph.kind is ParagraphKind.TABLE_REFERENCE
    assert paragraph.table_index == 0
    assert paragraph.runs == []


def test_table_reference_out_of_range_is_literal():
    (paragraph,) = parse_markup("[table][1]", table_count=1)
    assert paragraph.kind is ParagraphKind.NORMAL
    assert _runs(paragraph) == [("[table][1]", R)]


@pytest.mark.parametrize("body", ["[table][-1]", "[table][one]", "[table][]"])
def test_malformed_table_index_is_literal(body):
    (paragraph,) = parse_markup(body, table_count=3)
    assert paragraph.kind is ParagraphKind.NORMAL
    assert paragraph.plain_text() == body


def test_non_ascii_digits_are_not_a_table_index():
    (paragraph,) = parse_markup("[table][\u0661]", table_count=3)
    assert paragraph.kind is ParagraphKind.NORMAL
    assert paragraph.plain_text() == "[table][\u0661]"


def test_escaped_table_reference_is_literal():
    (paragraph,) = parse_markup(r"\[table][0]", table_count=1)
    assert paragraph.kind is ParagraphKind.NORMAL
    assert paragraph.plain_text() == "[table][0]"


def test_table_reference_must_be_whole_paragraph():
    (paragraph,) = parse_markup("[table][0] and more", table_count=1)
    assert paragraph.kind is ParagraphKind.NORMAL
    assert paragraph.plain_text() == "[table][0] and more"


def test_table_reference_ignores_surrounding_whitespace():
    paragraphs = parse_markup("Intro\n   [table][0]  \nOutro", table_count=1)
    assert [p.kind for p in paragraphs] == [
        ParagraphKind.NORMAL,
        ParagraphKind.TABLE_REFERENCE,
        ParagraphKind.NORMAL,
    ]


@pytest.mark.parametrize("body", ["- item one", "\u2022 item one", "   - item one"])
def test_bullet_markers(body):
    (paragraph,) = parse_markup(body)
    assert paragraph.kind is ParagraphKind.BULLET_ITEM
    assert _runs(paragraph) == [("item one", R)]


def test_dash_inside_word_is_not_a_bullet():
    (paragraph,) = parse_markup("-5 damage")
    assert paragraph.kind is ParagraphKind.NORMAL
    assert paragraph.plain_text() == "-5 damage"


def test_whitespace_collapses_and_trims():
    (paragraph,) = parse_markup("  a \t  b   ")
    assert _runs(paragraph) == [("a b", R)]


def test_crlf_is_one_paragraph_break():
    paragraphs = parse_markup("a\r\nb")
    assert [p.plain_text() for p in paragraphs] == ["a", "b"]


def test_empty_body_has_no_paragraphs():
    assert parse_markup("") == []
    assert parse_markup(" \t ") == []


def test_blank_line_is_empty_paragraph():
    paragraphs = parse_markup("a\n\nb")
    assert [p.plain_text() for p in paragraphs] == ["a", "", "b"]


def test_variant_carries_across_paragraphs():
    paragraphs = parse_markup("<b>a\nb <r>c")
    assert _runs(paragraphs[1]) == [("b ", B), ("c", R)]


def test_space_around_standalone_tag_collapses():
    (paragraph,) = parse_markup("a <b> b")
    assert _runs(paragraph) == [("a ", R), ("b", B)]


def test_only_first_paragraph_is_first_in_block():
    paragraphs = parse_markup("a\nb\n- c")
    assert [p.is_first_in_block for p in paragraphs] == [True, False, False]


def test_end_to_end_paragraph_structure():
    body = "Intro paragraph.\n- item one\n- item two\nClosing <b>bold<r> text."
    paragraphs = parse_markup(body, table_count=0)
    assert [p.kind for p in paragraphs] == [
        ParagraphKind.NORMAL,
        ParagraphKind.BULLET_ITEM,
        ParagraphKind.BULLET_ITEM,
        ParagraphKind.NORMAL,
    ]
    assert paragraphs[0].is_first_in_block
    assert _runs(paragraphs[0]) == [("Intro paragraph.", R)]
    assert _runs(paragraphs[3]) == [("Closing ", R), ("bold", B), (" text.", R)]


def test_token_stream_kinds():
    tokens = tokenize("- x <b>y\n[table][0]", table_count=1)
    assert [token.kind for token in tokens] == [
        TokenKind.BULLET_START,
        TokenKind.WORD,
        TokenKind.SPACE,
        TokenKind.STYLE_SWITCH,
        TokenKind.WORD,
        TokenKind.PARAGRAPH_BREAK,
        TokenKind.TABLE_REFERENCE,
    ]
    assert tokens[3].variant is B
    assert tokens[-1].table_index == 0


def test_escape_tokens():
    tokens = tokenize(r"\\\<i>")
    assert [(token.kind, token.text) for token in tokens] == [
        (TokenKind.WORD, "\\"),
        (TokenKind.ESCAPED_LITERAL, "<i>"),
    ]


def test_runs_for_cell_joins_paragraphs():
    assert runs_for_cell("a\nb", variant=B) == [StyledRun("a b", B)]
    assert runs_for_cell("", variant=B) == []
