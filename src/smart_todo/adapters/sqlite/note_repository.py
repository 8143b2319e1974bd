"""SQLite implementation of NoteRepository."""

from __future__ import annotations

from typing import Any

from smart_todo.adapters.sqlite.connection import Database
from smart_todo.adapters.sqlite.utils import generate_uuid, now_iso, require_text, row_to_dict
from smart_todo.exceptions import NotFoundError
from smart_todo.models import Note
from smart_todo.repositories import NoteRepository


class SqliteNoteRepository(NoteRepository):
    """SQLite implementation of the append-only note log."""

    def __init__(self, database: Database):
        self.database = database

    async def list_all(self, project_id: str | None = None) -> list[Note]:
        """List notes newest first, optionally restricted to one project."""
        query = "SELECT * FROM notes"
        params: list[Any] = []

        if project_id is not None:
            query += " WHERE project_id = ?"
            params.append(project_id)

        query += " ORDER BY created_at DESC, rowid DESC"

        with self.database.read() as conn:
            rows = conn.execute(query, params).fetchall()

        return [Note(**row_to_dict(row)) for row in rows]

    async def create(self, project_id: str, content: str) -> Note:
        """Append a note to a project."""
        content = require_text(content, "Note content")
        note = Note(
            id=generate_uuid(),
            project_id=project_id,
            content=content,
            created_at=now_iso(),
        )

        with self.database.write("notes") as conn:
            exists = conn.execute(
                "SELECT 1 FROM projects WHERE id = ?", (project_id,)
            ).fetchone()
            if exists is None:
                raise NotFoundError("project", project_id)
            conn.execute(
                "INSERT INTO notes (id, project_id, content, created_at) VALUES (?, ?, ?, ?)",
                (
                    note.id,
                    note.project_id,
                    note.content,
                    note.created_at.isoformat(timespec="microseconds"),
                ),
            )

        return note
