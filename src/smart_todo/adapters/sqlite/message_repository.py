"""SQLite implementation of MessageRepository."""

from __future__ import annotations

import json
import sqlite3

from smart_todo.adapters.sqlite.connection import Database
from smart_todo.adapters.sqlite.utils import row_to_dict
from smart_todo.exceptions import NotFoundError
from smart_todo.models import Message
from smart_todo.repositories import MessageRepository


def _row_to_message(row: sqlite3.Row) -> Message:
    data = row_to_dict(row)
    raw = data.pop("suggested_todos", None)
    data["suggested_todos"] = json.loads(raw) if raw else None
    return Message(**data)


def upsert_message(conn: sqlite3.Connection, message: Message) -> None:
    """Insert or update ``message`` inside the caller's transaction.

    The upsert keeps the original rowid so resaving does not reorder history.
    """
    suggested = None
    if message.suggested_todos is not None:
        suggested = json.dumps(
            [s.model_dump(mode="json") for s in message.suggested_todos]
        )

    conn.execute(
        """INSERT INTO messages (id, role, content, timestamp, suggested_todos)
           VALUES (?, ?, ?, ?, ?)
           ON CONFLICT(id) DO UPDATE SET
               role = excluded.role,
               content = excluded.content,
               timestamp = excluded.timestamp,
               suggested_todos = excluded.suggested_todos""",
        (
            message.id,
            message.role,
            message.content,
            message.timestamp.isoformat(timespec="microseconds"),
            suggested,
        ),
    )


class SqliteMessageRepository(MessageRepository):
    """SQLite implementation of conversation history."""

    def __init__(self, database: Database):
        self.database = database

    async def list_all(self) -> list[Message]:
        """List messages oldest first."""
        with self.database.read() as conn:
            rows = conn.execute(
                "SELECT * FROM messages ORDER BY timestamp ASC, rowid ASC"
            ).fetchall()
        return [_row_to_message(row) for row in rows]

    async def get(self, message_id: str) -> Message:
        """Get a message by ID."""
        with self.database.read() as conn:
            row = conn.execute(
                "SELECT * FROM messages WHERE id = ?", (message_id,)
            ).fetchone()
        if row is None:
            raise NotFoundError("message", message_id)
        return _row_to_message(row)

    async def save(self, message: Message) -> None:
        """Insert or update a message by id."""
        with self.database.write("messages") as conn:
            upsert_message(conn, message)
