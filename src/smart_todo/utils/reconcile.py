"""Merge authoritative todo snapshots into a manually ordered working list.

A user drags pending todos into an order of their choosing while the store
keeps producing fresh snapshots (a suggestion was accepted, a todo was
completed or deleted elsewhere). These functions fold each snapshot into the
local order without discarding it:

- ids new in the snapshot go first, in snapshot order
- ids gone from the snapshot are dropped
- ids present in both keep their local relative order

All functions are pure, never raise on malformed input, and return new
tuples rather than mutating their arguments.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Protocol, TypeVar


class Reconcilable(Protocol):
    id: str
    completed: bool
    completed_at: datetime | None


T = TypeVar("T", bound=Reconcilable)
Item = TypeVar("Item")


def _unique(items: Iterable[T]) -> list[T]:
    seen: set[str] = set()
    result = []
    for item in items:
        if item.id not in seen:
            seen.add(item.id)
            result.append(item)
    return result


def reconcile(local: Sequence[T], authoritative: Sequence[T]) -> tuple[T, ...]:
    """Return ``authoritative``'s items arranged in ``local``'s order.

    Items only in ``authoritative`` come first. Items in both take their
    field values from ``authoritative``. Items only in ``local`` are dropped.
    """
    try:
        local_items = _unique(local or ())
        fresh = _unique(authoritative or ())
    except (TypeError, AttributeError):
        return tuple(local) if isinstance(local, Sequence) else ()

    by_id = {item.id: item for item in fresh}
    known = {item.id for item in local_items}

    added = [item for item in fresh if item.id not in known]
    kept = [by_id[item.id] for item in local_items if item.id in by_id]
    return tuple(added + kept)


def needs_reconcile(local: Sequence[T], authoritative: Sequence[T]) -> bool:
    """True when the id set or any ``completed`` flag differs.

    Other field changes (text, priority) must not trigger a merge, or an
    in-flight drag would be overwritten.
    """
    try:
        local_state = {item.id: item.completed for item in local or ()}
        fresh_state = {item.id: item.completed for item in authoritative or ()}
    except (TypeError, AttributeError):
        return False
    return local_state != fresh_state


def refresh(local: Sequence[T], authoritative: Sequence[T]) -> tuple[T, ...]:
    """Fold a snapshot into the working list.

    Reconciles when :func:`needs_reconcile` says so; otherwise keeps the
    local order exactly and only swaps in the snapshot's field values.
    """
    if needs_reconcile(local, authoritative):
        return reconcile(local, authoritative)

    try:
        by_id = {item.id: item for item in authoritative or ()}
        return tuple(by_id.get(item.id, item) for item in local or ())
    except (TypeError, AttributeError):
        return tuple(local) if isinstance(local, Sequence) else ()


def _completion_key(item: Reconcilable) -> datetime:
    # Naive timestamps are treated as UTC so they compare with aware ones
    value = item.completed_at
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def arrange(items: Sequence[T]) -> tuple[T, ...]:
    """Pending items in their current order, then completed ones, newest completion first."""
    pending = [item for item in items if not item.completed]
    completed = [item for item in items if item.completed]
    dated = [item for item in completed if item.completed_at is not None]
    undated = [item for item in completed if item.completed_at is None]
    try:
        dated = sorted(dated, key=_completion_key, reverse=True)
    except TypeError:
        pass  # Incomparable values keep their input order
    return tuple(pending + dated + undated)


def move_item(items: Sequence[Item], from_index: int, to_index: int) -> Sequence[Item]:
    """Move one element from ``from_index`` to ``to_index``.

    Other elements shift to fill the gap. Out-of-range indices return the
    items unchanged. A tuple in gives a tuple out; anything else gives a list.
    """
    result = list(items or ())
    size = len(result)
    if not (0 <= from_index < size and 0 <= to_index < size):
        return tuple(result) if isinstance(items, tuple) else result

    result.insert(to_index, result.pop(from_index))
    return tuple(result) if isinstance(items, tuple) else result
