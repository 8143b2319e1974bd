"""Tests for the note, message and settings repositories."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from smart_todo.adapters.sqlite import (
    SqliteMessageRepository,
    SqliteNoteRepository,
    SqliteProjectRepository,
    SqliteSettingsRepository,
)
from smart_todo.adapters.sqlite.schema import SETTINGS_KEY
from smart_todo.exceptions import NotFoundError, ValidationError
from smart_todo.models import Message, Settings, Suggestion

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _message(message_id: str, offset: int = 0, **fields) -> Message:
    return Message(
        id=message_id,
        role=fields.pop("role", "user"),
        content=fields.pop("content", f"message {message_id}"),
        timestamp=T0 + timedelta(seconds=offset),
        **fields,
    )


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


class TestNotes:
    @pytest.mark.asyncio
    async def test_create_and_list_newest_first(self, database):
        project = await SqliteProjectRepository(database).create("Website")
        notes = SqliteNoteRepository(database)

        first = await notes.create(project.id, "Kickoff")
        second = await notes.create(project.id, "Design review")

        listed = await notes.list_all()
        assert [n.id for n in listed] == [second.id, first.id]
        assert listed[1].content == "Kickoff"

    @pytest.mark.asyncio
    async def test_filter_by_project(self, database):
        projects = SqliteProjectRepository(database)
        a = await projects.create("A")
        b = await projects.create("B")
        notes = SqliteNoteRepository(database)
        await notes.create(a.id, "For A")
        await notes.create(b.id, "For B")

        assert [n.content for n in await notes.list_all(a.id)] == ["For A"]

    @pytest.mark.asyncio
    async def test_empty_content_rejected(self, database):
        project = await SqliteProjectRepository(database).create("Website")
        with pytest.raises(ValidationError):
            await SqliteNoteRepository(database).create(project.id, "")

    @pytest.mark.asyncio
    async def test_unknown_project_rejected(self, database):
        notes = SqliteNoteRepository(database)
        with pytest.raises(NotFoundError):
            await notes.create("missing", "Orphan")
        assert await notes.list_all() == []


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class TestMessages:
    @pytest.mark.asyncio
    async def test_list_by_timestamp_ascending(self, database):
        repo = SqliteMessageRepository(database)
        await repo.save(_message("late", 10))
        await repo.save(_message("early", 0))

        assert [m.id for m in await repo.list_all()] == ["early", "late"]

    @pytest.mark.asyncio
    async def test_suggestions_round_trip(self, database):
        repo = SqliteMessageRepository(database)
        message = _message(
            "m1",
            role="assistant",
            suggested_todos=[Suggestion(text="Fix login bug", project_id="p1")],
        )
        await repo.save(message)

        assert await repo.get("m1") == message

    @pytest.mark.asyncio
    async def test_save_is_upsert(self, database):
        repo = SqliteMessageRepository(database)
        suggestion = Suggestion(text="Fix login bug", project_id="p1")
        await repo.save(_message("m1", role="assistant", suggested_todos=[suggestion]))
        await repo.save(_message("m2", 5))

        updated = _message(
            "m1",
            role="assistant",
            suggested_todos=[suggestion.model_copy(update={"added": True})],
        )
        await repo.save(updated)

        messages = await repo.list_all()
        assert [m.id for m in messages] == ["m1", "m2"]
        assert messages[0].suggested_todos[0].added is True

    @pytest.mark.asyncio
    async def test_no_suggestions_stored_as_null(self, database):
        repo = SqliteMessageRepository(database)
        await repo.save(_message("m1"))
        assert (await repo.get("m1")).suggested_todos is None

    @pytest.mark.asyncio
    async def test_get_missing(self, database):
        with pytest.raises(NotFoundError, match="Message not found"):
            await SqliteMessageRepository(database).get("missing")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    @pytest.mark.asyncio
    async def test_fresh_store_has_no_settings(self, database):
        assert await SqliteSettingsRepository(database).get() is None

    @pytest.mark.asyncio
    async def test_last_write_wins(self, database):
        repo = SqliteSettingsRepository(database)
        await repo.save(Settings(api_key="first"))
        await repo.save(Settings(api_key="second", celebration_enabled=False))

        assert await repo.get() == Settings(api_key="second", celebration_enabled=False)
        with database.read() as conn:
            assert conn.execute("SELECT COUNT(*) FROM settings").fetchone()[0] == 1

    @pytest.mark.asyncio
    async def test_reads_legacy_field_names(self, database):
        with database.write("settings") as conn:
            conn.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?)",
                (SETTINGS_KEY, '{"apiKey": "sk-old", "celebrationSoundEnabled": false}'),
            )

        settings = await SqliteSettingsRepository(database).get()
        assert settings == Settings(api_key="sk-old", celebration_enabled=False)
