"""Tests for resolving ids, id prefixes and project names."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from smart_todo.exceptions import NotFoundError, ValidationError
from smart_todo.models import Project
from smart_todo.utils.uuid_utils import resolve_prefix, resolve_project, resolve_todo


def _project(project_id: str, name: str) -> Project:
    return Project(id=project_id, name=name, created_at="2024-01-01T00:00:00+00:00")


PROJECTS = [
    _project("aaaa1111-0000", "Website"),
    _project("aaaa2222-0000", "Mobile"),
    _project("bbbb1111-0000", "Docs"),
]


class TestResolvePrefix:
    def test_full_id(self):
        assert resolve_prefix("bbbb1111-0000", PROJECTS, "project") == "bbbb1111-0000"

    def test_unique_prefix(self):
        assert resolve_prefix("AAAA1", PROJECTS, "project") == "aaaa1111-0000"

    def test_ambiguous_prefix(self):
        with pytest.raises(ValidationError, match="Ambiguous"):
            resolve_prefix("aaaa", PROJECTS, "project")

    def test_too_short(self):
        with pytest.raises(ValidationError, match="at least"):
            resolve_prefix("bb", PROJECTS, "project")

    def test_not_found(self):
        with pytest.raises(NotFoundError, match="Project not found: cccc"):
            resolve_prefix("cccc", PROJECTS, "project")


@pytest.fixture()
def gateway():
    gw = MagicMock()
    gw.list_projects = AsyncMock(return_value=PROJECTS)
    return gw


class TestResolveProject:
    @pytest.mark.asyncio
    async def test_by_name_case_insensitive(self, gateway):
        project = await resolve_project("  website ", gateway)
        assert project.id == "aaaa1111-0000"
        gateway.list_projects.assert_awaited_once_with(active_only=False)

    @pytest.mark.asyncio
    async def test_by_prefix(self, gateway):
        assert (await resolve_project("bbbb", gateway)).name == "Docs"

    @pytest.mark.asyncio
    async def test_unknown(self, gateway):
        with pytest.raises(NotFoundError):
            await resolve_project("Nothing", gateway)


@pytest.mark.asyncio
async def test_resolve_todo(make_todo):
    gw = MagicMock()
    gw.list_todos = AsyncMock(return_value=[make_todo("1234abcd"), make_todo("5678abcd")])
    assert (await resolve_todo("5678", gw)).id == "5678abcd"
