"""Per-project ordered view of todos that survives store refreshes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

from smart_todo.models import Todo
from smart_todo.utils import reconcile as ordering

ReorderHook = Callable[[str, list[str]], Awaitable[None]]


class TodoBoard:
    """A project's todos in the order the user arranged them.

    Pending todos can be moved by hand; completed todos always sit after
    them, most recently completed first. Each store snapshot is folded in
    with :func:`smart_todo.utils.reconcile.refresh`, so a refresh caused by a
    priority change never undoes a move. After a move, ``on_reorder`` is
    awaited with the new pending order so it can be persisted.
    """

    def __init__(
        self,
        project_id: str,
        items: Iterable[Todo] = (),
        on_reorder: ReorderHook | None = None,
    ):
        self.project_id = project_id
        self.on_reorder = on_reorder
        self._items: tuple[Todo, ...] = tuple(items)

    @classmethod
    def from_snapshot(
        cls,
        project_id: str,
        todos: Iterable[Todo],
        on_reorder: ReorderHook | None = None,
    ) -> TodoBoard:
        """Build a board from stored todos.

        Todos with a persisted position form the initial local order; the
        rest are reconciled in ahead of them, newest first.
        """
        todos = [t for t in todos if t.project_id == project_id]
        placed = sorted(
            (t for t in todos if t.position is not None), key=lambda t: t.position
        )
        board = cls(project_id, placed, on_reorder)
        board.refresh(todos)
        return board

    @property
    def items(self) -> tuple[Todo, ...]:
        """All todos: pending in manual order, then completed."""
        return ordering.arrange(self._items)

    @property
    def pending(self) -> tuple[Todo, ...]:
        return tuple(t for t in self._items if not t.completed)

    @property
    def completed(self) -> tuple[Todo, ...]:
        return tuple(t for t in self.items if t.completed)

    def refresh(self, snapshot: Iterable[Todo]) -> bool:
        """Fold an authoritative snapshot in; return True if the id order changed."""
        fresh = [t for t in snapshot if t.project_id == self.project_id]
        before = [t.id for t in self._items]
        self._items = ordering.refresh(self._items, fresh)
        return [t.id for t in self._items] != before

    async def move(self, from_index: int, to_index: int) -> bool:
        """Move a pending todo between pending positions and persist the order.

        Returns:
            False when the indices are out of range or equal
        """
        pending = self.pending
        moved = ordering.move_item(pending, from_index, to_index)
        if moved == pending:
            return False

        # The board only changes once the new order is persisted
        if self.on_reorder is not None:
            await self.on_reorder(self.project_id, [t.id for t in moved])
        self._items = tuple(moved) + self.completed
        return True
