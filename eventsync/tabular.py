"""Generic tabular projection of arbitrary JSON for administrative views."""

import json
from dataclasses import dataclass
from typing import Any

VALUE_COLUMN = "value"


class _Absent:
    """Marker for a key missing from a row."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class TabularProjection:
    columns: tuple[str, ...]
    rows: tuple[Any, ...]
    is_object_rows: bool

    def cell_value(self, row: Any, column: str) -> Any:
        """Value shown in ``column`` for ``row``; ABSENT when the key is missing."""
        if not self.is_object_rows:
            return row
        return row.get(column, ABSENT)

    def cells(self) -> list[list[str]]:
        """Stringified cells, row by row, aligned with ``columns``."""
        return [[format_value(self.cell_value(row, c)) for c in self.columns] for row in self.rows]


def is_record(value: Any) -> bool:
    return isinstance(value, dict)


def project(value: Any) -> TabularProjection | None:
    """Project a JSON array into columns and rows.

    Records contribute the union of their keys in first-seen order; any
    scalar or nested array falls back to a single ``value`` column.
    """
    if not isinstance(value, list):
        return None
    if not value:
        return TabularProjection(columns=(VALUE_COLUMN,), rows=(), is_object_rows=False)
    if all(is_record(item) for item in value):
        columns = dict.fromkeys(key for item in value for key in item)
        return TabularProjection(
            columns=tuple(columns) if columns else (VALUE_COLUMN,),
            rows=tuple(value),
            is_object_rows=True,
        )
    return TabularProjection(columns=(VALUE_COLUMN,), rows=tuple(value), is_object_rows=False)


def _fallback_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def format_value(value: Any) -> str:
    """Stringify one cell; never raises."""
    if isinstance(value, str):
        return value
    if value is ABSENT:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return json.dumps(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return _fallback_str(value)


def format_json(value: Any) -> str:
    """Indented JSON text for the raw view; empty when there is no data."""
    if value is None:
        return ""
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return _fallback_str(value)
