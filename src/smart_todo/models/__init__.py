"""smart-todo domain models.

Pydantic models for the entities kept in the local store and the
configuration file.
"""

from .config_models import AppConfig, AssistantConfig, OutputConfig
from .core import (
    PRIORITY_CYCLE,
    ChatReply,
    Message,
    MessageRole,
    Note,
    Priority,
    Project,
    Settings,
    Suggestion,
    Todo,
    TodoSource,
    next_priority,
)

__all__ = [
    # Entities
    "Project",
    "Todo",
    "Note",
    "Message",
    "Settings",
    "Suggestion",
    "ChatReply",
    # Literals and helpers
    "Priority",
    "TodoSource",
    "MessageRole",
    "PRIORITY_CYCLE",
    "next_priority",
    # Config models
    "AppConfig",
    "AssistantConfig",
    "OutputConfig",
]
