"""SQLite implementation of SettingsRepository."""

from __future__ import annotations

from smart_todo.adapters.sqlite.connection import Database
from smart_todo.adapters.sqlite.schema import SETTINGS_KEY
from smart_todo.models import Settings
from smart_todo.repositories import SettingsRepository


class SqliteSettingsRepository(SettingsRepository):
    """Settings stored as one JSON row under a fixed key."""

    def __init__(self, database: Database):
        self.database = database

    async def get(self) -> Settings | None:
        """Return saved settings, or None on a fresh store."""
        with self.database.read() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (SETTINGS_KEY,)
            ).fetchone()
        if row is None:
            return None
        return Settings.model_validate_json(row["value"])

    async def save(self, settings: Settings) -> None:
        """Replace the stored settings; last write wins."""
        with self.database.write("settings") as conn:
            conn.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (SETTINGS_KEY, settings.model_dump_json()),
            )
