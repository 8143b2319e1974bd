"""Migration 001: the five entity tables (projects, todos, notes, messages,
settings) in their original shape, with the lookup indexes."""

import sqlite3

from smart_todo.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create projects, todos, notes, messages and settings tables"

    def up(self, connection: sqlite3.Connection) -> None:
        for statement in (*schema.BASE_TABLES, *schema.BASE_INDEXES):
            connection.execute(statement)


initial_migration = InitialSchemaMigration()
