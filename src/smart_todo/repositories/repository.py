"""Repository abstraction layer for smart-todo.

Abstract base classes (ports) for every entity kind kept in the store. The
services and the store gateway depend only on these interfaces; the SQLite
adapters in ``smart_todo.adapters.sqlite`` implement them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from smart_todo.models import (
    Message,
    Note,
    Priority,
    Project,
    Settings,
    Todo,
    TodoSource,
)


class ProjectRepository(ABC):
    """Abstract base class for project persistence operations."""

    @abstractmethod
    async def list_all(self, archived: bool = False) -> list[Project]:
        """List active projects (newest first) or archived ones (most recently archived first).

        Args:
            archived: Return archived projects instead of active ones

        Returns:
            List of Project objects
        """
        raise NotImplementedError(
            "ProjectRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, project_id: str) -> Project:
        """Get a project by ID.

        Raises:
            NotFoundError: If project does not exist
        """
        raise NotImplementedError("ProjectRepository.get() must be implemented by adapter")

    @abstractmethod
    async def create(self, name: str, description: str = "") -> Project:
        """Create a new active project.

        Raises:
            ValidationError: If name is empty
        """
        raise NotImplementedError(
            "ProjectRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def archive(self, project_id: str) -> Project:
        """Hide a project from the active list, keeping its todos and notes."""
        raise NotImplementedError(
            "ProjectRepository.archive() must be implemented by adapter"
        )

    @abstractmethod
    async def restore(self, project_id: str) -> Project:
        """Return an archived project to the active list."""
        raise NotImplementedError(
            "ProjectRepository.restore() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, project_id: str) -> None:
        """Delete a project together with its todos and notes.

        Raises:
            NotFoundError: If project does not exist
        """
        raise NotImplementedError(
            "ProjectRepository.delete() must be implemented by adapter"
        )


class TodoRepository(ABC):
    """Abstract base class for todo persistence operations."""

    @abstractmethod
    async def list_all(self, project_id: str | None = None) -> list[Todo]:
        """List todos, newest first, optionally for a single project."""
        raise NotImplementedError("TodoRepository.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, todo_id: str) -> Todo:
        """Get a todo by ID.

        Raises:
            NotFoundError: If todo does not exist
        """
        raise NotImplementedError("TodoRepository.get() must be implemented by adapter")

    @abstractmethod
    async def create(self, project_id: str, text: str, source: TodoSource = "manual") -> Todo:
        """Create a pending todo in an existing project.

        Raises:
            ValidationError: If text is empty
            NotFoundError: If project does not exist
        """
        raise NotImplementedError("TodoRepository.create() must be implemented by adapter")

    @abstractmethod
    async def set_completed(self, todo_id: str, completed: bool) -> Todo:
        """Set completion state and stamp or clear completed_at."""
        raise NotImplementedError(
            "TodoRepository.set_completed() must be implemented by adapter"
        )

    @abstractmethod
    async def set_priority(self, todo_id: str, priority: Priority) -> Todo:
        """Change a todo's priority."""
        raise NotImplementedError(
            "TodoRepository.set_priority() must be implemented by adapter"
        )

    @abstractmethod
    async def reorder(self, project_id: str, todo_ids: list[str]) -> None:
        """Persist manual order: ``todo_ids[i]`` gets position ``i``."""
        raise NotImplementedError("TodoRepository.reorder() must be implemented by adapter")

    @abstractmethod
    async def delete(self, todo_id: str) -> None:
        """Delete a todo.

        Raises:
            NotFoundError: If todo does not exist
        """
        raise NotImplementedError("TodoRepository.delete() must be implemented by adapter")


class NoteRepository(ABC):
    """Abstract base class for the append-only note log."""

    @abstractmethod
    async def list_all(self, project_id: str | None = None) -> list[Note]:
        """List notes, newest first, optionally for a single project."""
        raise NotImplementedError("NoteRepository.list_all() must be implemented by adapter")

    @abstractmethod
    async def create(self, project_id: str, content: str) -> Note:
        """Append a note to an existing project."""
        raise NotImplementedError("NoteRepository.create() must be implemented by adapter")


class MessageRepository(ABC):
    """Abstract base class for conversation history."""

    @abstractmethod
    async def list_all(self) -> list[Message]:
        """List messages, oldest first."""
        raise NotImplementedError(
            "MessageRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, message_id: str) -> Message:
        """Get a message by ID.

        Raises:
            NotFoundError: If message does not exist
        """
        raise NotImplementedError("MessageRepository.get() must be implemented by adapter")

    @abstractmethod
    async def save(self, message: Message) -> None:
        """Insert or replace a message by id; saving an unchanged message is a no-op."""
        raise NotImplementedError("MessageRepository.save() must be implemented by adapter")


class SettingsRepository(ABC):
    """Abstract base class for the settings singleton."""

    @abstractmethod
    async def get(self) -> Settings | None:
        """Return saved settings, or None if never saved."""
        raise NotImplementedError("SettingsRepository.get() must be implemented by adapter")

    @abstractmethod
    async def save(self, settings: Settings) -> None:
        """Replace the settings wholesale."""
        raise NotImplementedError("SettingsRepository.save() must be implemented by adapter")
