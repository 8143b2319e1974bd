"""Migration 002: Add archive state to projects.

Archiving hides a project from the active list without touching its todos
or notes. Existing rows become active projects (archived=0, archived_at=NULL).
"""

from __future__ import annotations

import sqlite3

from smart_todo.adapters.sqlite.migrations.runner import Migration


class ProjectArchiveMigration(Migration):
    """Add archived and archived_at columns to projects."""

    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Add archived and archived_at columns to projects table"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(
            "ALTER TABLE projects ADD COLUMN archived INTEGER NOT NULL DEFAULT 0"
        )
        connection.execute("ALTER TABLE projects ADD COLUMN archived_at TEXT")


project_archive_migration = ProjectArchiveMigration()
