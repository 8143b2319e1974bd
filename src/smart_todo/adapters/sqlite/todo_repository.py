"""SQLite implementation of TodoRepository."""

from __future__ import annotations

import sqlite3
from typing import Any, get_args

from smart_todo.adapters.sqlite.connection import Database
from smart_todo.adapters.sqlite.utils import (
    bool_columns,
    build_update_clause,
    generate_uuid,
    now_iso,
    require_text,
    row_to_dict,
)
from smart_todo.exceptions import NotFoundError, ValidationError
from smart_todo.models import Priority, Todo, TodoSource
from smart_todo.repositories import TodoRepository


def _row_to_todo(row: sqlite3.Row) -> Todo:
    return Todo(**bool_columns(row_to_dict(row), "completed"))


def _select_todo(conn: sqlite3.Connection, todo_id: str) -> Todo:
    row = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,)).fetchone()
    if row is None:
        raise NotFoundError("todo", todo_id)
    return _row_to_todo(row)


def _require_project(conn: sqlite3.Connection, project_id: str) -> None:
    row = conn.execute("SELECT 1 FROM projects WHERE id = ?", (project_id,)).fetchone()
    if row is None:
        raise NotFoundError("project", project_id)


def insert_todo(
    conn: sqlite3.Connection, project_id: str, text: str, source: TodoSource
) -> Todo:
    """Insert a pending medium-priority todo inside the caller's transaction."""
    text = require_text(text, "Todo text")
    if source not in get_args(TodoSource):
        raise ValidationError(f"Invalid todo source: {source}")

    _require_project(conn, project_id)
    todo_id = generate_uuid()
    conn.execute(
        """INSERT INTO todos (
            id, project_id, text, completed, completed_at,
            created_at, source, priority, position
        ) VALUES (?, ?, ?, 0, NULL, ?, ?, 'medium', NULL)""",
        (todo_id, project_id, text, now_iso(), source),
    )
    return _select_todo(conn, todo_id)


class SqliteTodoRepository(TodoRepository):
    """SQLite implementation of todo repository."""

    def __init__(self, database: Database):
        """Initialize SQLite todo repository.

        Args:
            database: Open database shared by all repositories
        """
        self.database = database

    async def list_all(self, project_id: str | None = None) -> list[Todo]:
        """List todos newest first, optionally restricted to one project."""
        query = "SELECT * FROM todos"
        params: list[Any] = []

        if project_id is not None:
            query += " WHERE project_id = ?"
            params.append(project_id)

        query += " ORDER BY created_at DESC, rowid DESC"

        with self.database.read() as conn:
            rows = conn.execute(query, params).fetchall()

        return [_row_to_todo(row) for row in rows]

    async def get(self, todo_id: str) -> Todo:
        """Get a specific todo by ID."""
        with self.database.read() as conn:
            return _select_todo(conn, todo_id)

    async def create(
        self, project_id: str, text: str, source: TodoSource = "manual"
    ) -> Todo:
        """Create a new pending todo with medium priority."""
        with self.database.write("todos") as conn:
            return insert_todo(conn, project_id, text, source)

    async def _update(self, todo_id: str, updates: dict[str, Any]) -> Todo:
        set_clause, params = build_update_clause(updates)
        with self.database.write("todos") as conn:
            cursor = conn.execute(
                f"UPDATE todos SET {set_clause} WHERE id = ?", [*params, todo_id]
            )
            if cursor.rowcount == 0:
                raise NotFoundError("todo", todo_id)
            return _select_todo(conn, todo_id)

    async def set_completed(self, todo_id: str, completed: bool) -> Todo:
        """Mark a todo completed (stamping completed_at) or pending (clearing it)."""
        return await self._update(
            todo_id,
            {"completed": completed, "completed_at": now_iso() if completed else None},
        )

    async def set_priority(self, todo_id: str, priority: Priority) -> Todo:
        """Change a todo's priority."""
        if priority not in get_args(Priority):
            raise ValidationError(
                f"Invalid priority: {priority} (expected high, medium or low)"
            )
        return await self._update(todo_id, {"priority": priority})

    async def reorder(self, project_id: str, todo_ids: list[str]) -> None:
        """Store ``todo_ids`` as the project's manual order.

        Todos of the project missing from ``todo_ids`` lose their position;
        ids belonging to other projects are ignored.
        """
        with self.database.write("todos") as conn:
            _require_project(conn, project_id)
            conn.execute(
                "UPDATE todos SET position = NULL WHERE project_id = ?", (project_id,)
            )
            conn.executemany(
                "UPDATE todos SET position = ? WHERE id = ? AND project_id = ?",
                [(index, todo_id, project_id) for index, todo_id in enumerate(todo_ids)],
            )

    async def delete(self, todo_id: str) -> None:
        """Delete a todo."""
        with self.database.write("todos") as conn:
            cursor = conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("todo", todo_id)
