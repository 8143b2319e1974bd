"""Tests for SqliteProjectRepository against a real temporary database."""

from __future__ import annotations

import pytest

from smart_todo.adapters.sqlite import (
    SqliteNoteRepository,
    SqliteProjectRepository,
    SqliteTodoRepository,
)
from smart_todo.exceptions import NotFoundError, ValidationError


@pytest.fixture()
def repo(database):
    return SqliteProjectRepository(database)


# ---------------------------------------------------------------------------
# create / list
# ---------------------------------------------------------------------------


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_returns_active_project(self, repo):
        project = await repo.create("Website", "Marketing site")

        assert project.id
        assert project.name == "Website"
        assert project.description == "Marketing site"
        assert project.archived is False
        assert project.archived_at is None

    @pytest.mark.asyncio
    async def test_name_is_trimmed(self, repo):
        project = await repo.create("  Website  ")
        assert project.name == "Website"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   "])
    async def test_empty_name_rejected(self, repo, name):
        with pytest.raises(ValidationError, match="cannot be empty"):
            await repo.create(name)

    @pytest.mark.asyncio
    async def test_list_newest_first(self, repo):
        first = await repo.create("First")
        second = await repo.create("Second")
        third = await repo.create("Third")

        projects = await repo.list_all()
        assert [p.id for p in projects] == [third.id, second.id, first.id]

    @pytest.mark.asyncio
    async def test_get_missing_raises(self, repo):
        with pytest.raises(NotFoundError, match="Project not found"):
            await repo.get("missing")


# ---------------------------------------------------------------------------
# archive / restore
# ---------------------------------------------------------------------------


class TestArchive:
    @pytest.mark.asyncio
    async def test_archive_hides_from_active_list(self, repo):
        kept = await repo.create("Kept")
        gone = await repo.create("Gone")

        archived = await repo.archive(gone.id)

        assert archived.archived is True
        assert archived.archived_at is not None
        assert [p.id for p in await repo.list_all()] == [kept.id]
        assert [p.id for p in await repo.list_all(archived=True)] == [gone.id]

    @pytest.mark.asyncio
    async def test_archived_list_most_recent_first(self, repo):
        a = await repo.create("A")
        b = await repo.create("B")
        await repo.archive(b.id)
        await repo.archive(a.id)

        assert [p.id for p in await repo.list_all(archived=True)] == [a.id, b.id]

    @pytest.mark.asyncio
    async def test_archive_twice_keeps_first_timestamp(self, repo):
        project = await repo.create("P")
        first = await repo.archive(project.id)
        second = await repo.archive(project.id)
        assert second.archived_at == first.archived_at

    @pytest.mark.asyncio
    async def test_restore_round_trip(self, repo):
        project = await repo.create("P", "desc")
        await repo.archive(project.id)

        restored = await repo.restore(project.id)

        assert restored.archived is False
        assert restored.archived_at is None
        assert restored.model_dump() == project.model_dump()

    @pytest.mark.asyncio
    async def test_archive_keeps_children(self, database, repo):
        todos = SqliteTodoRepository(database)
        notes = SqliteNoteRepository(database)
        project = await repo.create("P")
        await todos.create(project.id, "Write tests")
        await notes.create(project.id, "Kickoff went well")

        await repo.archive(project.id)

        assert len(await todos.list_all(project.id)) == 1
        assert len(await notes.list_all(project.id)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["archive", "restore", "delete"])
    async def test_missing_id_raises(self, repo, method):
        with pytest.raises(NotFoundError):
            await getattr(repo, method)("missing")


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_cascades_to_todos_and_notes(self, database, repo):
        todos = SqliteTodoRepository(database)
        notes = SqliteNoteRepository(database)
        doomed = await repo.create("Doomed")
        other = await repo.create("Other")
        await todos.create(doomed.id, "Gone")
        await notes.create(doomed.id, "Gone too")
        survivor = await todos.create(other.id, "Stays")

        await repo.delete(doomed.id)

        assert await repo.list_all() == [other]
        assert [t.id for t in await todos.list_all()] == [survivor.id]
        assert await notes.list_all() == []

    @pytest.mark.asyncio
    async def test_failed_delete_leaves_store_intact(self, database, repo):
        todos = SqliteTodoRepository(database)
        project = await repo.create("P")
        await todos.create(project.id, "Stays")

        with pytest.raises(NotFoundError):
            await repo.delete("missing")

        assert len(await todos.list_all()) == 1
