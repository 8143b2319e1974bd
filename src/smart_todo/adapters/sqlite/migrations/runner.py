"""Versioned schema migrations for the local store.

``schema_version`` holds one row per applied migration; the highest version
is the schema's current marker. Migrations are applied in version order at
open time, each in its own transaction together with its marker row, so a
crash leaves the store at the last fully applied version. A store stamped
with a version this release does not ship is refused.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod

from smart_todo.adapters.sqlite.utils import now_iso
from smart_todo.exceptions import StoreUnavailableError
from smart_todo.utils.logger import get_logger

_VERSION_TABLE = """
    CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER PRIMARY KEY,
        description TEXT NOT NULL,
        applied_at TEXT NOT NULL
    )
"""


class Migration(ABC):
    """One forward-only schema change."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Sequential version, starting at 1."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What the migration changes, recorded in schema_version."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the change. Must not commit; the runner owns the transaction."""


class MigrationRunner:
    """Brings one SQLite connection up to the latest schema version."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute(_VERSION_TABLE)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Highest applied version, 0 for a fresh database."""
        (version,) = self.connection.execute(
            "SELECT COALESCE(MAX(version), 0) FROM schema_version"
        ).fetchone()
        return version

    def run_migration(self, migration: Migration) -> None:
        """Apply ``migration`` and record it, atomically.

        Raises:
            ValueError: If ``migration`` is not newer than the current version
            StoreUnavailableError: If it fails; the schema is left untouched
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current}"
            )

        conn = self.connection
        if conn.in_transaction:
            conn.commit()

        # Explicit BEGIN so DDL joins the transaction
        conn.execute("BEGIN")
        try:
            migration.up(conn)
            conn.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, now_iso()),
            )
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailableError(f"Migration {migration.version} failed: {e}") from e
        except Exception:
            conn.rollback()
            raise
        conn.commit()

        get_logger("migrations").info(
            "schema now at version %d (%s)", migration.version, migration.description
        )

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Apply every migration newer than the current version.

        Returns:
            How many were applied; 0 when the schema is already current

        Raises:
            StoreUnavailableError: If the database is newer than ``migrations``,
                or holds tables this schema never created
        """
        ordered = sorted(migrations, key=lambda m: m.version)
        current = self.get_current_version()
        latest = ordered[-1].version if ordered else 0

        if current == 0:
            self._refuse_unversioned_tables()

        if current > latest:
            raise StoreUnavailableError(
                f"Database schema version {current} is newer than the latest "
                f"supported version {latest}; upgrade smart-todo"
            )

        pending = [m for m in ordered if m.version > current]
        for migration in pending:
            self.run_migration(migration)
        return len(pending)

    def _refuse_unversioned_tables(self) -> None:
        # Tables without a version marker come from another application,
        # such as the desktop app's camelCase schema
        rows = self.connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' "
            "AND name NOT LIKE 'sqlite_%' AND name != 'schema_version' ORDER BY name"
        ).fetchall()
        if rows:
            tables = ", ".join(row[0] for row in rows)
            raise StoreUnavailableError(
                f"Unsupported legacy database: found tables ({tables}) but no schema "
                "version; point database_path at a new file"
            )

    def get_migration_history(self) -> list[dict]:
        """Applied migrations, oldest first."""
        rows = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        ).fetchall()
        return [
            {"version": version, "description": description, "applied_at": applied_at}
            for version, description, applied_at in rows
        ]
