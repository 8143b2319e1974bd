"""Repository interfaces for smart-todo.

Abstract base classes that define the contracts for data persistence. The
local SQLite implementations live in ``smart_todo.adapters.sqlite``.
"""

from .repository import (
    MessageRepository,
    NoteRepository,
    ProjectRepository,
    SettingsRepository,
    TodoRepository,
)

__all__ = [
    "ProjectRepository",
    "TodoRepository",
    "NoteRepository",
    "MessageRepository",
    "SettingsRepository",
]
