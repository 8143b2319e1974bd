"""ID resolution for command arguments.

Listings show the first 8 characters of each id; commands accept that
prefix, a full id, or (for projects) the project name.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from smart_todo.exceptions import NotFoundError, ValidationError

if TYPE_CHECKING:
    from smart_todo.models import Message, Project, Todo
    from smart_todo.services.gateway import StoreGateway

MIN_PREFIX_LENGTH = 4


class _HasId(Protocol):
    id: str


def resolve_prefix(value: str, candidates: Iterable[_HasId], kind: str) -> str:
    """Resolve a full id or unique id prefix among ``candidates``.

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the prefix is too short or ambiguous
    """
    needle = value.strip().lower()
    candidates = list(candidates)

    for item in candidates:
        if item.id.lower() == needle:
            return item.id

    if len(needle) < MIN_PREFIX_LENGTH:
        raise ValidationError(
            f"ID must be at least {MIN_PREFIX_LENGTH} characters. Got: {value!r}"
        )

    matches = [item for item in candidates if item.id.lower().startswith(needle)]
    if not matches:
        raise NotFoundError(kind, value)
    if len(matches) > 1:
        shown = ", ".join(item.id[:8] for item in matches[:5])
        if len(matches) > 5:
            shown += f", ... ({len(matches)} total)"
        raise ValidationError(
            f"Ambiguous ID '{value}' matches {len(matches)} {kind}s: {shown}"
        )
    return matches[0].id


async def resolve_project(value: str, gateway: StoreGateway) -> Project:
    """Resolve a project id, id prefix or case-insensitive name.

    Archived projects are included so they can be restored or deleted.
    """
    projects = await gateway.list_projects(active_only=False)

    name = value.strip().lower()
    named = [p for p in projects if p.name.lower() == name]
    if len(named) == 1:
        return named[0]

    project_id = resolve_prefix(value, projects, "project")
    return next(p for p in projects if p.id == project_id)


async def resolve_todo(value: str, gateway: StoreGateway) -> Todo:
    todos = await gateway.list_todos()
    todo_id = resolve_prefix(value, todos, "todo")
    return next(t for t in todos if t.id == todo_id)


async def resolve_message(value: str, gateway: StoreGateway) -> Message:
    messages = await gateway.list_messages()
    message_id = resolve_prefix(value, messages, "message")
    return next(m for m in messages if m.id == message_id)
