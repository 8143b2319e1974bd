"""Request/response boundary between clients and the local store.

``StoreGateway`` is the one object a client needs: it owns the open
``Database``, builds the repositories on top of it, and exposes each store
operation as a coroutine. ``dispatch`` offers the same operations keyed by
name for clients that speak in requests rather than method calls. Requests
are served one at a time in arrival order and are never retried.

The gateway is created by whoever owns the process lifecycle and passed
explicitly to consumers; there is no module-level instance.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from smart_todo.adapters.sqlite import (
    Database,
    SqliteMessageRepository,
    SqliteNoteRepository,
    SqliteProjectRepository,
    SqliteSettingsRepository,
    SqliteTodoRepository,
)
from smart_todo.adapters.sqlite.message_repository import upsert_message
from smart_todo.adapters.sqlite.todo_repository import insert_todo
from smart_todo.exceptions import ValidationError
from smart_todo.models import (
    Message,
    Note,
    Priority,
    Project,
    Settings,
    Suggestion,
    Todo,
    TodoSource,
    next_priority,
)
from smart_todo.utils.logger import get_logger
from smart_todo.utils.suggestion_parser import extract_suggestions

# Operation names accepted by ``StoreGateway.dispatch``
OPERATIONS = (
    "list_projects",
    "list_archived_projects",
    "add_project",
    "archive_project",
    "restore_project",
    "delete_project",
    "list_todos",
    "add_todo",
    "toggle_todo",
    "update_todo_priority",
    "cycle_todo_priority",
    "reorder_todos",
    "delete_todo",
    "list_notes",
    "add_note",
    "list_messages",
    "get_message",
    "save_message",
    "add_suggested_todo",
    "get_settings",
    "save_settings",
    "extract_suggestions",
)


class StoreGateway:
    """Facade exposing every store operation over one open database."""

    def __init__(self, database: Database):
        self.database = database
        self.projects = SqliteProjectRepository(database)
        self.todos = SqliteTodoRepository(database)
        self.notes = SqliteNoteRepository(database)
        self.messages = SqliteMessageRepository(database)
        self.settings = SqliteSettingsRepository(database)
        self.logger = get_logger("store")

    @classmethod
    def open(cls, db_path: str | Path) -> StoreGateway:
        """Open the database at ``db_path`` and wrap it."""
        return cls(Database.open(db_path))

    def close(self) -> None:
        self.database.close()

    def __enter__(self) -> StoreGateway:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    async def dispatch(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Run the named operation and return its result.

        Raises:
            ValidationError: If ``operation`` is not a known operation
        """
        if operation not in OPERATIONS:
            raise ValidationError(f"Unknown operation: {operation}")
        self.logger.debug("dispatch %s", operation)
        return await getattr(self, operation)(*args, **kwargs)

    # Projects

    async def list_projects(self, active_only: bool = True) -> list[Project]:
        """Active projects newest first; with ``active_only=False`` archived ones follow."""
        projects = await self.projects.list_all(archived=False)
        if not active_only:
            projects += await self.projects.list_all(archived=True)
        return projects

    async def list_archived_projects(self) -> list[Project]:
        return await self.projects.list_all(archived=True)

    async def add_project(self, name: str, description: str = "") -> Project:
        project = await self.projects.create(name, description)
        self.logger.info("project added: %s", project.id)
        return project

    async def archive_project(self, project_id: str) -> Project:
        project = await self.projects.archive(project_id)
        self.logger.info("project archived: %s", project_id)
        return project

    async def restore_project(self, project_id: str) -> Project:
        project = await self.projects.restore(project_id)
        self.logger.info("project restored: %s", project_id)
        return project

    async def delete_project(self, project_id: str) -> None:
        await self.projects.delete(project_id)
        self.logger.info("project deleted with its todos and notes: %s", project_id)

    # Todos

    async def list_todos(self, project_id: str | None = None) -> list[Todo]:
        return await self.todos.list_all(project_id)

    async def add_todo(
        self, project_id: str, text: str, source: TodoSource = "manual"
    ) -> Todo:
        todo = await self.todos.create(project_id, text, source)
        self.logger.info("todo added: %s (%s)", todo.id, source)
        return todo

    async def toggle_todo(self, todo_id: str, completed: bool) -> Todo:
        return await self.todos.set_completed(todo_id, completed)

    async def update_todo_priority(self, todo_id: str, priority: Priority) -> Todo:
        return await self.todos.set_priority(todo_id, priority)

    async def cycle_todo_priority(self, todo_id: str) -> Todo:
        """Advance a todo to the next priority (high → medium → low → high)."""
        todo = await self.todos.get(todo_id)
        return await self.todos.set_priority(todo_id, next_priority(todo.priority))

    async def reorder_todos(self, project_id: str, todo_ids: list[str]) -> None:
        await self.todos.reorder(project_id, list(todo_ids))

    async def delete_todo(self, todo_id: str) -> None:
        await self.todos.delete(todo_id)

    # Notes

    async def list_notes(self, project_id: str | None = None) -> list[Note]:
        return await self.notes.list_all(project_id)

    async def add_note(self, project_id: str, content: str) -> Note:
        return await self.notes.create(project_id, content)

    # Messages

    async def list_messages(self) -> list[Message]:
        return await self.messages.list_all()

    async def get_message(self, message_id: str) -> Message:
        return await self.messages.get(message_id)

    async def save_message(self, message: Message | dict[str, Any]) -> None:
        await self.messages.save(_coerce(Message, message))

    async def add_suggested_todo(
        self, project_id: str, text: str, message: Message | dict[str, Any]
    ) -> Todo:
        """Create an ``ai`` todo and save ``message`` in one transaction.

        ``message`` carries the suggestion already marked as added, so either
        both writes land or neither does.
        """
        message = _coerce(Message, message)
        with self.database.write("todos", "messages") as conn:
            todo = insert_todo(conn, project_id, text, "ai")
            upsert_message(conn, message)
        self.logger.info("todo added: %s (ai, from message %s)", todo.id, message.id)
        return todo

    # Settings

    async def get_settings(self) -> Settings | None:
        return await self.settings.get()

    async def save_settings(self, settings: Settings | dict[str, Any]) -> None:
        await self.settings.save(_coerce(Settings, settings))

    # Suggestions

    async def extract_suggestions(
        self, text: str, projects: Iterable[Any] | None = None
    ) -> list[Suggestion]:
        """Parse ``text`` against ``projects`` (default: the active projects)."""
        if projects is None:
            projects = await self.list_projects()
        return extract_suggestions(text, projects)


def _coerce(model: type, value: Any) -> Any:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__.lower()}: {e.errors()[0]['msg']}") from e
