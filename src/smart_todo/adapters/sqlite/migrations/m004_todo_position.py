"""Migration 004: Persist manual todo order.

Adds a nullable ``position`` column. NULL means the todo has never been
placed by hand; such todos are shown ahead of positioned ones.
"""

from __future__ import annotations

import sqlite3

from smart_todo.adapters.sqlite import schema
from smart_todo.adapters.sqlite.migrations.runner import Migration


class TodoPositionMigration(Migration):
    """Add position column and index to todos."""

    @property
    def version(self) -> int:
        return 4

    @property
    def description(self) -> str:
        return "Add position column to todos table for manual ordering"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("ALTER TABLE todos ADD COLUMN position INTEGER")
        connection.execute(schema.CREATE_TODOS_POSITION_INDEX)


todo_position_migration = TodoPositionMigration()
