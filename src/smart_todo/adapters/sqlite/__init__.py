"""SQLite adapter module - Local database storage implementation."""

from smart_todo.adapters.sqlite.connection import Database
from smart_todo.adapters.sqlite.message_repository import SqliteMessageRepository
from smart_todo.adapters.sqlite.note_repository import SqliteNoteRepository
from smart_todo.adapters.sqlite.project_repository import SqliteProjectRepository
from smart_todo.adapters.sqlite.settings_repository import SqliteSettingsRepository
from smart_todo.adapters.sqlite.todo_repository import SqliteTodoRepository

__all__ = [
    "Database",
    "SqliteProjectRepository",
    "SqliteTodoRepository",
    "SqliteNoteRepository",
    "SqliteMessageRepository",
    "SqliteSettingsRepository",
]
