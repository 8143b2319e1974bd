"""Migration 003: Add priority to todos; existing todos become 'medium'."""

from __future__ import annotations

import sqlite3

from smart_todo.adapters.sqlite.migrations.runner import Migration


class TodoPriorityMigration(Migration):
    """Add priority column to todos."""

    @property
    def version(self) -> int:
        return 3

    @property
    def description(self) -> str:
        return "Add priority column to todos table (default 'medium')"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(
            "ALTER TABLE todos ADD COLUMN priority TEXT NOT NULL DEFAULT 'medium'"
        )


todo_priority_migration = TodoPriorityMigration()
