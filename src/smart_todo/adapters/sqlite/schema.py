"""Table definitions for the local SQLite store.

Each statement describes a table as first created by migration 001. Later
columns (archive state, priority, position) are added by their own numbered
migrations so that databases created by older releases evolve in place.
"""

from __future__ import annotations

# Highest migration version shipped with this release
SCHEMA_VERSION = 4

# Projects table
CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL
)
"""

# Todos table - cascades with its project
CREATE_TODOS_TABLE = """
CREATE TABLE IF NOT EXISTS todos (
    id TEXT PRIMARY KEY,
    project_id TEXT NOT NULL,
    text TEXT NOT NULL,
    completed INTEGER NOT NULL DEFAULT 0,
    completed_at TEXT,
    created_at TEXT NOT NULL,
    source TEXT NOT NULL DEFAULT 'manual',
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
)
"""

# Notes table - append-only, cascades with its project
CREATE_NOTES_TABLE = """
CREATE TABLE IF NOT EXISTS notes (
    id TEXT PRIMARY KEY,
    project_id TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
)
"""

# Messages table - suggested_todos holds a JSON array or NULL
CREATE_MESSAGES_TABLE = """
CREATE TABLE IF NOT EXISTS messages (
    id TEXT PRIMARY KEY,
    role TEXT NOT NULL,
    content TEXT NOT NULL,
    timestamp TEXT NOT NULL,
    suggested_todos TEXT
)
"""

# Settings table - a single JSON row under SETTINGS_KEY
CREATE_SETTINGS_TABLE = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

SETTINGS_KEY = "app_settings"

CREATE_TODOS_PROJECT_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_todos_project ON todos(project_id)"
)
CREATE_NOTES_PROJECT_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_notes_project ON notes(project_id)"
)
CREATE_TODOS_POSITION_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_todos_position ON todos(project_id, position)"
)

BASE_TABLES = [
    CREATE_PROJECTS_TABLE,
    CREATE_TODOS_TABLE,
    CREATE_NOTES_TABLE,
    CREATE_MESSAGES_TABLE,
    CREATE_SETTINGS_TABLE,
]

BASE_INDEXES = [
    CREATE_TODOS_PROJECT_INDEX,
    CREATE_NOTES_PROJECT_INDEX,
]
