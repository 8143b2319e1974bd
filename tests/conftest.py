"""Shared test fixtures and configuration.

Keeps config, data and log files inside each test's tmp_path and provides
real SQLite-backed databases and gateways.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from smart_todo.adapters.sqlite import Database
from smart_todo.models import Todo
from smart_todo.services.gateway import StoreGateway


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point platformdirs lookups at tmp_path and reset the cached ConfigService."""
    from smart_todo.services.config_service import get_config_service

    monkeypatch.setattr(
        "smart_todo.services.config_service.user_config_dir",
        lambda *args, **kwargs: str(tmp_path / "config"),
    )
    monkeypatch.setattr(
        "smart_todo.services.config_service.user_data_dir",
        lambda *args, **kwargs: str(tmp_path / "data"),
    )
    monkeypatch.setattr(
        "smart_todo.utils.logger.user_log_dir",
        lambda *args, **kwargs: str(tmp_path / "logs"),
    )
    get_config_service.cache_clear()
    yield tmp_path
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "store" / "smart-todo.db"


@pytest.fixture()
def database(db_path):
    """A migrated database on a temporary file."""
    db = Database.open(db_path)
    yield db
    db.close()


@pytest.fixture()
def gateway(db_path):
    """A StoreGateway over a temporary file."""
    gw = StoreGateway.open(db_path)
    yield gw
    gw.close()


# ---------------------------------------------------------------------------
# Model helpers
# ---------------------------------------------------------------------------


def _make_todo(
    todo_id: str,
    project_id: str = "p1",
    completed: bool = False,
    completed_at: datetime | None = None,
    **fields,
) -> Todo:
    """Build a Todo without touching the store."""
    if completed and completed_at is None:
        completed_at = datetime(2024, 1, 1, tzinfo=UTC)
    return Todo(
        id=todo_id,
        project_id=project_id,
        text=fields.pop("text", f"Todo {todo_id}"),
        completed=completed,
        completed_at=completed_at,
        created_at=fields.pop("created_at", datetime(2024, 1, 1, tzinfo=UTC)),
        **fields,
    )


@pytest.fixture()
def make_todo():
    """Factory for in-memory Todo models."""
    return _make_todo
