"""Project, todo, note, message and settings models."""

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

Priority = Literal["high", "medium", "low"]
TodoSource = Literal["manual", "ai"]
MessageRole = Literal["user", "assistant"]

# Clicking the priority dot rotates through these in order.
PRIORITY_CYCLE: dict[str, Priority] = {
    "high": "medium",
    "medium": "low",
    "low": "high",
}


def next_priority(priority: Priority) -> Priority:
    """Return the priority that follows ``priority`` in the cycle."""
    return PRIORITY_CYCLE[priority]


class Project(BaseModel):
    """Project model owning a set of todos and notes.

    Attributes:
        id: Unique identifier for the project
        name: Project name
        description: Free-form description, may be empty
        created_at: Creation timestamp
        archived: Whether the project is hidden from the active list
        archived_at: When the project was archived (None while active)
    """

    id: str
    name: str
    description: str = ""
    created_at: datetime
    archived: bool = False
    archived_at: datetime | None = None


class Todo(BaseModel):
    """Todo model representing an actionable item inside a project.

    Attributes:
        id: Unique identifier for the todo
        project_id: Owning project
        text: What needs doing
        completed: Completion status
        completed_at: Completion timestamp (None while pending)
        created_at: Creation timestamp
        source: "manual" when typed by the user, "ai" when accepted from a suggestion
        priority: high, medium or low
        position: Manual order within the project's pending list (None until reordered)
    """

    id: str
    project_id: str
    text: str
    completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime
    source: TodoSource = "manual"
    priority: Priority = "medium"
    position: int | None = None


class Note(BaseModel):
    """Immutable note attached to a project."""

    id: str
    project_id: str
    content: str
    created_at: datetime


class Suggestion(BaseModel):
    """Candidate todo parsed from an assistant reply.

    Attributes:
        text: Candidate todo text
        project_id: Matched project, or None when the caller must choose
        added: Whether the user already turned this into a todo
    """

    text: str
    project_id: str | None = Field(
        default=None, validation_alias=AliasChoices("project_id", "projectId")
    )
    added: bool = False


class Message(BaseModel):
    """One turn of the assistant conversation."""

    id: str
    role: MessageRole
    content: str
    timestamp: datetime
    suggested_todos: list[Suggestion] | None = Field(
        default=None,
        validation_alias=AliasChoices("suggested_todos", "suggestedTodos"),
    )


class Settings(BaseModel):
    """Singleton application settings.

    Attributes:
        api_key: Assistant API key
        celebration_enabled: Show a celebration when a todo is completed
    """

    api_key: str = Field(default="", validation_alias=AliasChoices("api_key", "apiKey"))
    celebration_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "celebration_enabled", "celebrationEnabled", "celebrationSoundEnabled"
        ),
    )


class ChatReply(BaseModel):
    """Result of sending one message to the assistant.

    ``failed`` replies are shown to the user but never persisted.
    """

    user_message: Message
    reply: Message
    failed: bool = False
