"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

import sqlite3

from smart_todo.adapters.sqlite.connection import Database
from smart_todo.adapters.sqlite.utils import (
    bool_columns,
    generate_uuid,
    now_iso,
    require_text,
    row_to_dict,
)
from smart_todo.exceptions import NotFoundError
from smart_todo.models import Project
from smart_todo.repositories import ProjectRepository


def _row_to_project(row: sqlite3.Row) -> Project:
    return Project(**bool_columns(row_to_dict(row), "archived"))


def _select_project(conn: sqlite3.Connection, project_id: str) -> Project:
    row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
    if row is None:
        raise NotFoundError("project", project_id)
    return _row_to_project(row)


class SqliteProjectRepository(ProjectRepository):
    """SQLite implementation of project repository."""

    def __init__(self, database: Database):
        """Initialize SQLite project repository.

        Args:
            database: Open database shared by all repositories
        """
        self.database = database

    async def list_all(self, archived: bool = False) -> list[Project]:
        """List active projects, or archived ones when ``archived`` is set."""
        if archived:
            query = (
                "SELECT * FROM projects WHERE archived = 1 "
                "ORDER BY archived_at DESC, rowid DESC"
            )
        else:
            query = (
                "SELECT * FROM projects WHERE archived = 0 "
                "ORDER BY created_at DESC, rowid DESC"
            )

        with self.database.read() as conn:
            rows = conn.execute(query).fetchall()

        return [_row_to_project(row) for row in rows]

    async def get(self, project_id: str) -> Project:
        """Get a specific project by ID."""
        with self.database.read() as conn:
            return _select_project(conn, project_id)

    async def create(self, name: str, description: str = "") -> Project:
        """Create a new project."""
        name = require_text(name, "Project name")
        description = (description or "").strip()

        project_id = generate_uuid()
        with self.database.write("projects") as conn:
            conn.execute(
                """INSERT INTO projects (id, name, description, created_at, archived, archived_at)
                   VALUES (?, ?, ?, ?, 0, NULL)""",
                (project_id, name, description, now_iso()),
            )
            return _select_project(conn, project_id)

    async def archive(self, project_id: str) -> Project:
        """Archive a project; archiving an archived project keeps its archived_at."""
        with self.database.write("projects") as conn:
            cursor = conn.execute(
                """UPDATE projects
                   SET archived = 1, archived_at = COALESCE(archived_at, ?)
                   WHERE id = ?""",
                (now_iso(), project_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("project", project_id)
            return _select_project(conn, project_id)

    async def restore(self, project_id: str) -> Project:
        """Restore an archived project to the active list."""
        with self.database.write("projects") as conn:
            cursor = conn.execute(
                "UPDATE projects SET archived = 0, archived_at = NULL WHERE id = ?",
                (project_id,),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("project", project_id)
            return _select_project(conn, project_id)

    async def delete(self, project_id: str) -> None:
        """Hard-delete a project; todos and notes go with it."""
        with self.database.write("projects", "todos", "notes") as conn:
            # Children first; must hold even with foreign_keys off
            conn.execute("DELETE FROM todos WHERE project_id = ?", (project_id,))
            conn.execute("DELETE FROM notes WHERE project_id = ?", (project_id,))
            cursor = conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("project", project_id)
