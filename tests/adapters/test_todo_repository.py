"""Tests for SqliteTodoRepository against a real temporary database."""

from __future__ import annotations

import pytest
import pytest_asyncio

from smart_todo.adapters.sqlite import SqliteProjectRepository, SqliteTodoRepository
from smart_todo.exceptions import NotFoundError, ValidationError


@pytest.fixture()
def repo(database):
    return SqliteTodoRepository(database)


@pytest_asyncio.fixture()
async def project(database):
    return await SqliteProjectRepository(database).create("Website")


# ---------------------------------------------------------------------------
# create / list
# ---------------------------------------------------------------------------


class TestCreate:
    @pytest.mark.asyncio
    async def test_defaults(self, repo, project):
        todo = await repo.create(project.id, "Fix login bug")

        assert todo.project_id == project.id
        assert todo.text == "Fix login bug"
        assert todo.completed is False
        assert todo.completed_at is None
        assert todo.source == "manual"
        assert todo.priority == "medium"
        assert todo.position is None

    @pytest.mark.asyncio
    async def test_ai_source(self, repo, project):
        todo = await repo.create(project.id, "Suggested", "ai")
        assert todo.source == "ai"

    @pytest.mark.asyncio
    async def test_invalid_source_rejected(self, repo, project):
        with pytest.raises(ValidationError, match="source"):
            await repo.create(project.id, "Text", "robot")

    @pytest.mark.asyncio
    async def test_empty_text_rejected(self, repo, project):
        with pytest.raises(ValidationError):
            await repo.create(project.id, "  ")

    @pytest.mark.asyncio
    async def test_unknown_project_rejected(self, repo):
        with pytest.raises(NotFoundError, match="Project not found"):
            await repo.create("missing", "Orphan")

    @pytest.mark.asyncio
    async def test_list_newest_first_and_filtered(self, database, repo, project):
        other = await SqliteProjectRepository(database).create("Other")
        a = await repo.create(project.id, "A")
        b = await repo.create(project.id, "B")
        c = await repo.create(other.id, "C")

        assert [t.id for t in await repo.list_all()] == [c.id, b.id, a.id]
        assert [t.id for t in await repo.list_all(project.id)] == [b.id, a.id]


# ---------------------------------------------------------------------------
# mutations
# ---------------------------------------------------------------------------


class TestMutations:
    @pytest.mark.asyncio
    async def test_toggle_sets_and_clears_completed_at(self, repo, project):
        todo = await repo.create(project.id, "Ship it")

        done = await repo.set_completed(todo.id, True)
        assert done.completed is True
        assert done.completed_at is not None

        reopened = await repo.set_completed(todo.id, False)
        assert reopened.completed is False
        assert reopened.completed_at is None

    @pytest.mark.asyncio
    async def test_set_priority(self, repo, project):
        todo = await repo.create(project.id, "Ship it")
        updated = await repo.set_priority(todo.id, "high")
        assert updated.priority == "high"
        assert (await repo.get(todo.id)).priority == "high"

    @pytest.mark.asyncio
    async def test_invalid_priority_rejected(self, repo, project):
        todo = await repo.create(project.id, "Ship it")
        with pytest.raises(ValidationError, match="Invalid priority"):
            await repo.set_priority(todo.id, "urgent")

    @pytest.mark.asyncio
    async def test_missing_todo(self, repo):
        with pytest.raises(NotFoundError):
            await repo.set_completed("missing", True)
        with pytest.raises(NotFoundError):
            await repo.set_priority("missing", "low")
        with pytest.raises(NotFoundError):
            await repo.delete("missing")

    @pytest.mark.asyncio
    async def test_delete(self, repo, project):
        todo = await repo.create(project.id, "Temporary")
        await repo.delete(todo.id)
        assert await repo.list_all() == []


# ---------------------------------------------------------------------------
# reorder
# ---------------------------------------------------------------------------


class TestReorder:
    @pytest.mark.asyncio
    async def test_positions_follow_given_order(self, repo, project):
        a = await repo.create(project.id, "A")
        b = await repo.create(project.id, "B")
        c = await repo.create(project.id, "C")

        await repo.reorder(project.id, [c.id, a.id, b.id])

        positions = {t.id: t.position for t in await repo.list_all(project.id)}
        assert positions == {c.id: 0, a.id: 1, b.id: 2}

    @pytest.mark.asyncio
    async def test_omitted_todos_lose_position(self, repo, project):
        a = await repo.create(project.id, "A")
        b = await repo.create(project.id, "B")
        await repo.reorder(project.id, [a.id, b.id])

        await repo.reorder(project.id, [b.id])

        positions = {t.id: t.position for t in await repo.list_all(project.id)}
        assert positions == {a.id: None, b.id: 0}

    @pytest.mark.asyncio
    async def test_ignores_other_projects(self, database, repo, project):
        other = await SqliteProjectRepository(database).create("Other")
        foreign = await repo.create(other.id, "Foreign")

        await repo.reorder(project.id, [foreign.id])

        assert (await repo.get(foreign.id)).position is None

    @pytest.mark.asyncio
    async def test_unknown_project(self, repo):
        with pytest.raises(NotFoundError):
            await repo.reorder("missing", [])
