"""Small helpers shared by the SQLite repositories."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from smart_todo.exceptions import ValidationError


def generate_uuid() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    """Current UTC time as ISO 8601.

    Microseconds are always present so stored values sort lexically.
    """
    return datetime.now(UTC).isoformat(timespec="microseconds")


def row_to_dict(row: Any) -> dict[str, Any]:
    """A ``sqlite3.Row`` as a plain dict; ``{}`` for a missing row."""
    return {} if row is None else dict(row)


def bool_columns(row: dict[str, Any], *columns: str) -> dict[str, Any]:
    """Turn 0/1 integer columns into booleans in place and return the row."""
    for column in columns:
        if row.get(column) is not None:
            row[column] = bool(row[column])
    return row


def build_update_clause(updates: dict[str, Any]) -> tuple[str, list[Any]]:
    """SET clause and parameters for a partial UPDATE.

    None values are kept: they clear the column. Booleans are stored as 0/1.
    """
    columns = [f"{column} = ?" for column in updates]
    params = [int(v) if isinstance(v, bool) else v for v in updates.values()]
    return ", ".join(columns), params


def require_text(value: str | None, field: str) -> str:
    """Strip ``value`` and reject it when empty.

    Raises:
        ValidationError: If the value is None or blank
    """
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{field} cannot be empty")
    return text
