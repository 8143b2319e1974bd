"""Tests for TodoBoard, the per-project ordered todo view."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from smart_todo.exceptions import StoreUnavailableError
from smart_todo.services.todo_board import TodoBoard


def _ids(items):
    return [t.id for t in items]


class TestFromSnapshot:
    def test_unplaced_todos_keep_snapshot_order(self, make_todo):
        board = TodoBoard.from_snapshot("p1", [make_todo("c"), make_todo("b"), make_todo("a")])
        assert _ids(board.items) == ["c", "b", "a"]

    def test_persisted_positions_win(self, make_todo):
        todos = [
            make_todo("c", position=0),
            make_todo("b", position=2),
            make_todo("a", position=1),
        ]
        assert _ids(TodoBoard.from_snapshot("p1", todos).items) == ["c", "a", "b"]

    def test_new_todos_go_first(self, make_todo):
        todos = [make_todo("new"), make_todo("x", position=1), make_todo("y", position=0)]
        assert _ids(TodoBoard.from_snapshot("p1", todos).items) == ["new", "y", "x"]

    def test_other_projects_filtered(self, make_todo):
        todos = [make_todo("a"), make_todo("b", project_id="p2")]
        assert _ids(TodoBoard.from_snapshot("p1", todos).items) == ["a"]

    def test_completed_after_pending(self, make_todo):
        todos = [
            make_todo("done-old", completed=True, completed_at=datetime(2024, 1, 1, tzinfo=UTC)),
            make_todo("pending"),
            make_todo("done-new", completed=True, completed_at=datetime(2024, 2, 1, tzinfo=UTC)),
        ]
        board = TodoBoard.from_snapshot("p1", todos)

        assert _ids(board.items) == ["pending", "done-new", "done-old"]
        assert _ids(board.pending) == ["pending"]
        assert _ids(board.completed) == ["done-new", "done-old"]


class TestRefresh:
    def test_priority_change_does_not_reorder(self, make_todo):
        board = TodoBoard("p1", [make_todo("b"), make_todo("a")])

        changed = board.refresh([make_todo("a", priority="high"), make_todo("b")])

        assert changed is False
        assert _ids(board.items) == ["b", "a"]
        assert board.items[1].priority == "high"

    def test_new_todo_reconciled_in_front(self, make_todo):
        board = TodoBoard("p1", [make_todo("b"), make_todo("a")])

        changed = board.refresh([make_todo("n"), make_todo("a"), make_todo("b")])

        assert changed is True
        assert _ids(board.items) == ["n", "b", "a"]

    def test_deleted_todo_dropped(self, make_todo):
        board = TodoBoard("p1", [make_todo("b"), make_todo("a")])
        board.refresh([make_todo("a")])
        assert _ids(board.items) == ["a"]


class TestMove:
    @pytest.mark.asyncio
    async def test_move_persists_pending_order(self, make_todo):
        hook = AsyncMock()
        board = TodoBoard(
            "p1",
            [make_todo("a"), make_todo("b"), make_todo("c"), make_todo("d", completed=True)],
            on_reorder=hook,
        )

        assert await board.move(0, 2) is True

        assert _ids(board.items) == ["b", "c", "a", "d"]
        hook.assert_awaited_once_with("p1", ["b", "c", "a"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("from_index,to_index", [(0, 0), (0, 5), (-1, 1)])
    async def test_noop_moves(self, make_todo, from_index, to_index):
        hook = AsyncMock()
        board = TodoBoard("p1", [make_todo("a"), make_todo("b")], on_reorder=hook)

        assert await board.move(from_index, to_index) is False

        assert _ids(board.items) == ["a", "b"]
        hook.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_persist_keeps_order(self, make_todo):
        hook = AsyncMock(side_effect=StoreUnavailableError("Database write failed: disk full"))
        board = TodoBoard("p1", [make_todo("a"), make_todo("b"), make_todo("c")], on_reorder=hook)

        with pytest.raises(StoreUnavailableError):
            await board.move(0, 2)

        assert _ids(board.items) == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_move_survives_priority_refresh(self, make_todo):
        board = TodoBoard("p1", [make_todo("a"), make_todo("b"), make_todo("c")])
        await board.move(2, 0)

        board.refresh([make_todo("a"), make_todo("b", priority="low"), make_todo("c")])

        assert _ids(board.items) == ["c", "a", "b"]

    @pytest.mark.asyncio
    async def test_durable_order_round_trip(self, gateway):
        project = await gateway.add_project("P")
        a = await gateway.add_todo(project.id, "A")
        b = await gateway.add_todo(project.id, "B")
        c = await gateway.add_todo(project.id, "C")

        board = TodoBoard.from_snapshot(
            project.id, await gateway.list_todos(project.id), on_reorder=gateway.reorder_todos
        )
        assert _ids(board.items) == [c.id, b.id, a.id]
        await board.move(0, 2)

        reloaded = TodoBoard.from_snapshot(project.id, await gateway.list_todos(project.id))
        assert _ids(reloaded.items) == [b.id, a.id, c.id]
