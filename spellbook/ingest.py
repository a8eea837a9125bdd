"""
Helpers that assemble JSON record files into typed objects.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple

from .logger import get_logger
from .models import ContentRecord, Table

LOGGER = get_logger(__name__)


class RecordError(ValueError):
    """Raised when a record file does not match the expected shape."""


def load_record(path: Path) -> ContentRecord:
    """Read a single record from a JSON object file.

    Args:
        path: JSON file holding one record object.
    Returns:
        Parsed ContentRecord.
    """

    data = _read_json(path=path)
    if not isinstance(data, Mapping):
        raise RecordError(f"{path}: expected a JSON object")
    return record_from_dict(data, source=str(path))


def load_records(paths: Iterable[Path]) -> List[ContentRecord]:
    """Read records from files and directories, preserving argument order.

    Directories contribute their ``*.json`` files in name order; a file may
    hold either one record object or a list of them.

    Args:
        paths: Record files or directories.
    Returns:
        Records in load order.
    """

    records: List[ContentRecord] = []
    for path in _expand_paths(paths=paths):
        data = _read_json(path=path)
        items = data if isinstance(data, list) else [data]
        for position, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise RecordError(f"{path}[{position}]: expected a JSON object")
            records.append(record_from_dict(item, source=f"{path}[{position}]"))
    LOGGER.info("Loaded %d records", len(records))
    return records


def record_from_dict(data: Mapping[str, Any], *, source: str = "<record>") -> ContentRecord:
    """Build a ContentRecord from plain data.

    Args:
        data: Record mapping.
        source: Label used in error messages.
    Returns:
        Parsed ContentRecord.

    Example:
        >>> record_from_dict({"title": "Aid", "fields": {"Range": "30 feet"}}).fields
        [('Range', '30 feet')]
    """

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise RecordError(f"{source}: 'title' must be a non-empty string")
    return ContentRecord(
        title=title,
        body=_optional_text(data=data, key="body", source=source) or "",
        subtitle=_optional_text(data=data, key="subtitle", source=source),
        fields=_fields(raw=data.get("fields"), source=source),
        secondary_body=_optional_text(data=data, key="secondary_body", source=source),
        secondary_label=_optional_text(data=data, key="secondary_label", source=source),
        tables=[
            _table(raw=raw, source=f"{source}.tables[{position}]")
            for position, raw in enumerate(data.get("tables") or [])
        ],
    )


def _expand_paths(*, paths: Iterable[Path]) -> List[Path]:
    expanded: List[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(sorted(path.glob("*.json")))
        else:
            expanded.append(path)
    return expanded


def _read_json(*, path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RecordError(f"{path}: invalid JSON ({exc.msg})") from exc


def _optional_text(*, data: Mapping[str, Any], key: str, source: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise RecordError(f"{source}: '{key}' must be a string")


def _fields(*, raw: Any, source: str) -> List[Tuple[str, str]]:
    """Return attribute fields from a mapping or a list of pairs.

    Args:
        raw: ``{label: value}`` or ``[[label, value], ...]``.
        source: Label used in error messages.
    Returns:
        Ordered (label, value) pairs.
    """

    if raw is None:
        return []
    if isinstance(raw, Mapping):
        return [(str(label), str(value)) for label, value in raw.items()]
    if isinstance(raw, list):
        pairs: List[Tuple[str, str]] = []
        for item in raw:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise RecordError(f"{source}: each field must be a [label, value] pair")
            pairs.append((str(item[0]), str(item[1])))
        return pairs
    raise RecordError(f"{source}: 'fields' must be an object or a list of pairs")


def _table(*, raw: Any, source: str) -> Table:
    if not isinstance(raw, Mapping):
        raise RecordError(f"{source}: expected a table object")
    labels = raw.get("column_labels") or []
    rows = raw.get("rows") or []
    if not isinstance(labels, list) or not isinstance(rows, list):
        raise RecordError(f"{source}: 'column_labels' and 'rows' must be lists")
    if not all(isinstance(row, list) for row in rows):
        raise RecordError(f"{source}: each row must be a list of cells")
    return Table(
        title=str(raw.get("title") or ""),
        column_labels=[str(label) for label in labels],
        rows=[[str(cell) for cell in row] for row in rows],
    )
