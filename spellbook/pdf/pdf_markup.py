"""Tokenizer for the inline body markup.

The grammar is small: style tags switch the active font variant, a paragraph
that is exactly ``[table][N]`` references a table, a paragraph starting with
``-`` or ``•`` is a bullet item, and newlines separate paragraphs. Backslashes
escape tags in pairs: ``\\\\`` before a tag is a literal backslash, and one
left-over backslash turns the tag into literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from ..logger import get_logger
from .pdf_constants import BULLET_MARKERS
from .pdf_types import FontVariant

LOGGER = get_logger(__name__)

STYLE_TAGS = {
    "<r>": FontVariant.REGULAR,
    "<b>": FontVariant.BOLD,
    "<i>": FontVariant.ITALIC,
    "<bi>": FontVariant.BOLD_ITALIC,
    "<ib>": FontVariant.BOLD_ITALIC,
}
STYLE_TAG_RE = re.compile(r"(\\*)(<(?:r|b|i|bi|ib)>)")
TABLE_TAG_RE = re.compile(r"(\\*)(\[table\]\[([0-9]+)\])")


class TokenKind(Enum):
    WORD = "word"
    SPACE = "space"
    PARAGRAPH_BREAK = "paragraph_break"
    STYLE_SWITCH = "style_switch"
    BULLET_START = "bullet_start"
    TABLE_REFERENCE = "table_reference"
    ESCAPED_LITERAL = "escaped_literal"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical unit of the body markup.

    Args:
        kind: Token type.
        text: Source text (the literal text for words and escapes).
        variant: Target variant for style switches.
        table_index: Resolved index for table references.
    """

    kind: TokenKind
    text: str = ""
    variant: FontVariant | None = None
    table_index: int | None = None


def tokenize(body: str, *, table_count: int = 0) -> List[Token]:
    """Split a body string into a flat token stream.

    Args:
        body: Markup text.
        table_count: Number of tables the record owns.
    Returns:
        Tokens in source order.

    Example:
        >>> [token.kind.value for token in tokenize("a <b>b")]
        ['word', 'space', 'style_switch', 'word']
    """

    if not body.strip():
        return []
    tokens: List[Token] = []
    for index, paragraph in enumerate(_split_paragraphs(body)):
        if index:
            tokens.append(Token(TokenKind.PARAGRAPH_BREAK, "\n"))
        tokens.extend(_tokenize_paragraph(paragraph, table_count=table_count))
    return tokens


def _split_paragraphs(body: str) -> List[str]:
    return body.replace("\r\n", "\n").split("\n")


def _tokenize_paragraph(paragraph: str, *, table_count: int) -> List[Token]:
    """Return tokens for one paragraph without its trailing break.

    Args:
        paragraph: Paragraph text.
        table_count: Number of tables the record owns.
    Returns:
        Tokens for the paragraph.
    """

    chunks = paragraph.split()
    tokens: List[Token] = []
    if chunks and chunks[0] in BULLET_MARKERS:
        tokens.append(Token(TokenKind.BULLET_START, chunks[0]))
        chunks = chunks[1:]
    if len(chunks) == 1 and not tokens:
        match = TABLE_TAG_RE.fullmatch(chunks[0])
        if match is not None:
            return _table_tokens(match=match, table_count=table_count)
    for position, chunk in enumerate(chunks):
        if position:
            tokens.append(Token(TokenKind.SPACE, " "))
        tokens.extend(_tokenize_chunk(chunk))
    return tokens


def _table_tokens(*, match: re.Match[str], table_count: int) -> List[Token]:
    """Return tokens for a paragraph that is a lone table tag.

    Args:
        match: Full match of ``TABLE_TAG_RE`` over the paragraph.
        table_count: Number of tables the record owns.
    Returns:
        A table reference, or literal text when escaped or out of range.
    """

    slashes, tag, digits = match.group(1), match.group(2), match.group(3)
    tokens = _escape_prefix(slashes)
    if len(slashes) % 2:
        tokens.append(Token(TokenKind.ESCAPED_LITERAL, tag))
        return tokens
    index = int(digits)
    if index >= table_count:
        LOGGER.debug("Table reference %s out of range (%d tables)", tag, table_count)
        tokens.append(Token(TokenKind.WORD, tag))
        return tokens
    tokens.append(Token(TokenKind.TABLE_REFERENCE, tag, table_index=index))
    return tokens


def _tokenize_chunk(chunk: str) -> List[Token]:
    """Split one whitespace-free chunk into words, escapes and style switches.

    Example:
        >>> [token.text for token in _tokenize_chunk("a<b>b")]
        ['a', '<b>', 'b']
    """

    tokens: List[Token] = []
    cursor = 0
    for match in STYLE_TAG_RE.finditer(chunk):
        if match.start() > cursor:
            tokens.append(Token(TokenKind.WORD, chunk[cursor : match.start()]))
        slashes, tag = match.group(1), match.group(2)
        tokens.extend(_escape_prefix(slashes))
        if len(slashes) % 2:
            tokens.append(Token(TokenKind.ESCAPED_LITERAL, tag))
        else:
            tokens.append(Token(TokenKind.STYLE_SWITCH, tag, variant=STYLE_TAGS[tag]))
        cursor = match.end()
    if cursor < len(chunk):
        tokens.append(Token(TokenKind.WORD, chunk[cursor:]))
    return tokens


def _escape_prefix(slashes: str) -> List[Token]:
    """Return the literal backslashes left after pairing escapes.

    Example:
        >>> _escape_prefix("\\\\\\\\\\\\")[0].text
        '\\\\'
    """

    literal = "\\" * (len(slashes) // 2)
    if not literal:
        return []
    return [Token(TokenKind.WORD, literal)]
