"""Database migration system for the local SQLite store."""

from .m001_initial_schema import initial_migration
from .m002_project_archive import project_archive_migration
from .m003_todo_priority import todo_priority_migration
from .m004_todo_position import todo_position_migration
from .runner import Migration, MigrationRunner

# All migrations in order
ALL_MIGRATIONS: list[Migration] = [
    initial_migration,
    project_archive_migration,
    todo_priority_migration,
    todo_position_migration,
]

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationRunner",
]
