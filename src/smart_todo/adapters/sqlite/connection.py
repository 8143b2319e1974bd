"""Database connection management for the local SQLite store.

A ``Database`` is constructed once per process by whoever owns the process
lifecycle (the CLI root callback, a test fixture) and is handed to every
repository. It provides:
- WAL mode and foreign key enforcement (cascade deletes)
- Automatic directory creation and owner-only file permissions
- Versioned migrations on open
- One write lock per entity kind, plus a connection lock held for the whole
  of each transaction so readers never see a half-applied mutation
"""

from __future__ import annotations

import os
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from smart_todo.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from smart_todo.exceptions import StoreUnavailableError
from smart_todo.utils.logger import get_logger

# Lock acquisition order; multi-kind writes always lock in this order.
ENTITY_KINDS = ("projects", "todos", "notes", "messages", "settings")

MEMORY_PATH = ":memory:"


class Database:
    """Owner of the single SQLite connection used by all repositories."""

    def __init__(
        self,
        connection: sqlite3.Connection,
        db_path: Path | None = None,
        lock_timeout: float = 30.0,
    ):
        """Wrap an already configured connection.

        Prefer ``Database.open`` which configures and migrates the connection.
        """
        self._connection: sqlite3.Connection | None = connection
        self.db_path = db_path
        self.lock_timeout = lock_timeout
        self._connection_lock = threading.RLock()
        self._write_locks = {kind: threading.Lock() for kind in ENTITY_KINDS}

    @classmethod
    def open(cls, db_path: str | Path, lock_timeout: float = 30.0) -> Database:
        """Open (creating if needed) and migrate the database at ``db_path``.

        Raises:
            StoreUnavailableError: If the file cannot be opened or migrated
        """
        logger = get_logger("store")
        in_memory = str(db_path) == MEMORY_PATH
        path = None if in_memory else Path(db_path)

        try:
            is_new_database = False
            if path is not None:
                path.parent.mkdir(parents=True, exist_ok=True)
                is_new_database = not path.exists()

            connection = sqlite3.connect(
                MEMORY_PATH if path is None else str(path),
                check_same_thread=False,  # Guarded by the connection lock
                timeout=lock_timeout,  # Wait for other processes' locks
            )
            connection.row_factory = sqlite3.Row
            connection.execute("PRAGMA foreign_keys = ON")
            if path is not None:
                connection.execute("PRAGMA journal_mode = WAL")

            if is_new_database and path is not None:
                os.chmod(path, 0o600)

            try:
                applied = MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
            except StoreUnavailableError as e:
                connection.close()
                logger.error("refusing database %s: %s", db_path, e)
                raise
        except (OSError, sqlite3.Error) as e:
            logger.error("failed to open database %s: %s", db_path, e)
            raise StoreUnavailableError(f"Cannot open database {db_path}: {e}") from e

        logger.info(
            "opened database %s (%d migration(s) applied)", db_path, applied
        )
        return cls(connection, db_path=path, lock_timeout=lock_timeout)

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise StoreUnavailableError("Database is closed")
        return self._connection

    @property
    def is_closed(self) -> bool:
        return self._connection is None

    def close(self) -> None:
        """Close the connection; further use raises StoreUnavailableError."""
        with self._connection_lock:
            if self._connection is None:
                return
            try:
                self._connection.commit()
                self._connection.close()
            finally:
                self._connection = None

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def schema_version(self) -> int:
        """Current migration version of the open database."""
        with self.read() as conn:
            return MigrationRunner(conn).get_current_version()

    @contextmanager
    def read(self) -> Iterator[sqlite3.Connection]:
        """Yield the connection for reads, excluding concurrent transactions."""
        with self._connection_lock:
            try:
                yield self.connection
            except sqlite3.Error as e:
                raise StoreUnavailableError(f"Database read failed: {e}") from e

    @contextmanager
    def write(self, *kinds: str) -> Iterator[sqlite3.Connection]:
        """Run one transaction holding the write locks of ``kinds``.

        Commits on success and rolls back on any exception. The connection
        lock stays held until commit, so a reader cannot observe the
        intermediate state of e.g. "update row, then reselect it".

        Raises:
            StoreUnavailableError: On lock timeout or any sqlite error
        """
        ordered = [kind for kind in ENTITY_KINDS if kind in kinds]
        acquired: list[threading.Lock] = []
        try:
            for kind in ordered:
                lock = self._write_locks[kind]
                if not lock.acquire(timeout=self.lock_timeout):
                    raise StoreUnavailableError(
                        f"Timed out waiting for the {kind} write lock"
                    )
                acquired.append(lock)

            with self._connection_lock:
                conn = self.connection
                try:
                    conn.execute("BEGIN IMMEDIATE")
                    yield conn
                    conn.commit()
                except sqlite3.Error as e:
                    if conn.in_transaction:
                        conn.rollback()
                    get_logger("store").error("write to %s failed: %s", ", ".join(ordered), e)
                    raise StoreUnavailableError(f"Database write failed: {e}") from e
                except BaseException:
                    if conn.in_transaction:
                        conn.rollback()
                    raise
        finally:
            for lock in reversed(acquired):
                lock.release()
