"""Error hierarchy shared by the store, services and CLI."""

from __future__ import annotations

from smart_todo.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_STORE_UNAVAILABLE,
)


class SmartTodoError(Exception):
    """Base application error carrying a process exit code."""

    exit_code = ERROR_GENERAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SmartTodoError):
    """A required field is empty or an argument is out of range."""

    exit_code = ERROR_INVALID_ARGS


class NotFoundError(SmartTodoError):
    """A mutate or delete targeted an id that does not exist."""

    exit_code = ERROR_NOT_FOUND

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind.capitalize()} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class StoreUnavailableError(SmartTodoError):
    """The local database could not be opened, locked or written."""

    exit_code = ERROR_STORE_UNAVAILABLE


class UpstreamFailureError(SmartTodoError):
    """The assistant request failed, was rejected or timed out."""

    exit_code = ERROR_NETWORK


class AssistantNotConfiguredError(UpstreamFailureError):
    """No API key has been saved in settings."""

    def __init__(self):
        super().__init__(
            "API key not configured. Run 'smart-todo settings set --api-key <key>'."
        )
