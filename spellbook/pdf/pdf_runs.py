"""Fold markup tokens into styled paragraphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .pdf_markup import Token, TokenKind, tokenize
from .pdf_types import FontVariant, Paragraph, ParagraphKind, StyledRun


@dataclass(slots=True)
class _RunState:
    """Accumulator threaded through the token fold.

    ``variant`` survives paragraph breaks; everything else is per paragraph.
    """

    variant: FontVariant
    runs: List[StyledRun] = field(default_factory=list)
    pending_space: FontVariant | None = None
    kind: ParagraphKind = ParagraphKind.NORMAL
    table_index: int | None = None
    content_tokens: int = 0

    def reset_paragraph(self) -> None:
        self.runs = []
        self.pending_space = None
        self.kind = ParagraphKind.NORMAL
        self.table_index = None
        self.content_tokens = 0


def build_paragraphs(
    tokens: Sequence[Token], *, default_variant: FontVariant = FontVariant.REGULAR
) -> List[Paragraph]:
    """Return paragraphs of merged styled runs for a token stream.

    Args:
        tokens: Output of ``tokenize``.
        default_variant: Variant active at the start of the text.
    Returns:
        Paragraphs in source order; only the first is marked first-in-block.

    Example:
        >>> paragraphs = build_paragraphs(tokenize("Closing <b>bold<r> text."))
        >>> [(run.text, run.variant.value) for run in paragraphs[0].runs]
        [('Closing ', 'regular'), ('bold', 'bold'), (' text.', 'regular')]
    """

    if not tokens:
        return []
    paragraphs: List[Paragraph] = []
    state = _RunState(variant=default_variant)
    for token in tokens:
        if token.kind is TokenKind.PARAGRAPH_BREAK:
            paragraphs.append(_close_paragraph(state=state, index=len(paragraphs)))
            continue
        _apply_token(state=state, token=token)
    paragraphs.append(_close_paragraph(state=state, index=len(paragraphs)))
    return paragraphs


def parse_markup(
    text: str,
    *,
    table_count: int = 0,
    default_variant: FontVariant = FontVariant.REGULAR,
) -> List[Paragraph]:
    """Tokenize and fold markup text in one step.

    Example:
        >>> parse_markup("[table][0]", table_count=1)[0].kind.value
        'table_reference'
    """

    return build_paragraphs(
        tokenize(text, table_count=table_count), default_variant=default_variant
    )


def runs_for_cell(text: str, *, variant: FontVariant) -> List[StyledRun]:
    """Return the runs of a single-block text such as a table cell.

    Paragraph breaks inside the text are joined with a space.

    Args:
        text: Markup text.
        variant: Variant active at the start of the text.
    Returns:
        Merged styled runs.

    Example:
        >>> runs_for_cell("a\\nb", variant=FontVariant.BOLD)
        [StyledRun(text='a b', variant=<FontVariant.BOLD: 'bold'>)]
    """

    runs: List[StyledRun] = []
    for paragraph in parse_markup(text, default_variant=variant):
        if not paragraph.runs:
            continue
        if runs:
            _push(runs=runs, text=" ", variant=runs[-1].variant)
        for run in paragraph.runs:
            _push(runs=runs, text=run.text, variant=run.variant)
    return runs


def _apply_token(*, state: _RunState, token: Token) -> None:
    kind = token.kind
    if kind is TokenKind.SPACE:
        if state.runs and state.pending_space is None:
            state.pending_space = state.variant
    elif kind is TokenKind.STYLE_SWITCH:
        state.variant = token.variant or FontVariant.REGULAR
    elif kind is TokenKind.BULLET_START:
        state.kind = ParagraphKind.BULLET_ITEM
    else:
        if kind is TokenKind.TABLE_REFERENCE:
            state.table_index = token.table_index
        state.content_tokens += 1
        _append_text(state=state, text=token.text)


def _append_text(*, state: _RunState, text: str) -> None:
    if state.pending_space is not None:
        _push(runs=state.runs, text=" ", variant=state.pending_space)
        state.pending_space = None
    _push(runs=state.runs, text=text, variant=state.variant)


def _push(*, runs: List[StyledRun], text: str, variant: FontVariant) -> None:
    """Append text, merging into the last run when the variant matches."""

    if runs and runs[-1].variant is variant:
        runs[-1] = StyledRun(runs[-1].text + text, variant)
    else:
        runs.append(StyledRun(text, variant))


def _close_paragraph(*, state: _RunState, index: int) -> Paragraph:
    """Emit the accumulated paragraph and reset per-paragraph state.

    Args:
        state: Fold state.
        index: Position of the paragraph within the text.
    Returns:
        The finished Paragraph.
    """

    is_table = (
        state.table_index is not None
        and state.content_tokens == 1
        and state.kind is ParagraphKind.NORMAL
    )
    if is_table:
        paragraph = Paragraph(
            ParagraphKind.TABLE_REFERENCE,
            [],
            is_first_in_block=index == 0,
            table_index=state.table_index,
        )
    else:
        paragraph = Paragraph(state.kind, state.runs, is_first_in_block=index == 0)
    state.reset_paragraph()
    return paragraph
