"""
Typed containers for spellbook content records.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(slots=True)
class Table:
    """A table referenced from a record body by ``[table][N]``.

    Labels, cells and the title are markup strings; style tags inside them are
    honored when the table is laid out.

    Attributes:
        title: Optional title drawn centered above the table.
        column_labels: Header row; may be empty.
        rows: Data rows; rows may have different lengths.
    """

    title: str = ""
    column_labels: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def column_count(self) -> int:
        """Return the widest row length, labels included.

        Example:
            >>> Table(column_labels=["a"], rows=[["1", "2", "3"], ["4"]]).column_count()
            3
        """

        widths = [len(self.column_labels), *(len(row) for row in self.rows)]
        return max(widths)

    def padded_labels(self) -> List[str]:
        if not self.column_labels:
            return []
        return _pad(self.column_labels, self.column_count())

    def padded_rows(self) -> List[List[str]]:
        """Return rows with missing trailing cells filled with empty strings.

        Example:
            >>> Table(rows=[["a", "b"], ["c"]]).padded_rows()
            [['a', 'b'], ['c', '']]
        """

        count = self.column_count()
        return [_pad(row, count) for row in self.rows]


@dataclass(slots=True)
class ContentRecord:
    """One entry of the book: a header block, a body and its tables.

    Attributes:
        title: Record header text.
        body: Markup body; paragraphs are separated by newlines.
        subtitle: Optional italic line under the header.
        fields: Attribute fields rendered as ``Label: value`` lines.
        secondary_body: Optional follow-up text appended to the body.
        secondary_label: Bold-italic lead-in for the secondary body.
        tables: Tables addressable from the body by position.
    """

    title: str
    body: str = ""
    subtitle: str | None = None
    fields: List[Tuple[str, str]] = field(default_factory=list)
    secondary_body: str | None = None
    secondary_label: str | None = None
    tables: List[Table] = field(default_factory=list)

    def full_body(self) -> str:
        """Return the body with the secondary body appended as a new paragraph.

        Example:
            >>> ContentRecord("Aid", body="Heal.", secondary_body="More.", secondary_label="At Higher Levels").full_body()
            'Heal.\\n<bi> At Higher Levels. <r> More.'
        """

        if not self.secondary_body:
            return self.body
        lead = f"<bi> {self.secondary_label}. <r> " if self.secondary_label else ""
        return f"{self.body}\n{lead}{self.secondary_body}"


def _pad(cells: List[str], count: int) -> List[str]:
    return [*cells, *([""] * (count - len(cells)))]
