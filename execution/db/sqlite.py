"""
execution/db/sqlite.py

SQLite helper module for the local backend.
Provides only infrastructure: path resolution, connection setup, and schema initialization.
No business logic lives here.
"""

import sqlite3
from pathlib import Path

from execution.config import get_db_path_override


def get_db_path() -> str:
    """Return the absolute path to the local SQLite database file.

    LEARNHUB_DB_PATH wins when set. Otherwise the file lives under the repo's
    /tmp folder (which is safe to delete and is never committed). Creates the
    directory if it does not exist.

    Returns:
        str: Absolute path to the database file.
    """
    override = get_db_path_override()
    if override:
        path = Path(override).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)

    repo_root = Path(__file__).resolve().parents[2]  # execution/db/sqlite.py -> repo root
    tmp_dir = repo_root / "tmp"
    tmp_dir.mkdir(parents=True, exist_ok=True)
    return str(tmp_dir / "app.db")


def connect(db_path: str | None = None) -> sqlite3.Connection:
    """Open and return a sqlite3 connection with foreign key enforcement enabled.

    Args:
        db_path: Path to the SQLite file. Defaults to the result of get_db_path().

    Returns:
        sqlite3.Connection: An open connection with PRAGMA foreign_keys = ON.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    conn.row_factory = sqlite3.Row  # rows accessible by column name
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create all application tables if they do not already exist.

    Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).
    Does not drop or migrate existing tables.

    Schema:
        users          — local identity records (email + password hash)
        courses        — catalog entries, listed by created_at
        lessons        — per-course lessons, listed by order_index
        user_progress  — per-user, per-course completion marker

    user_progress deliberately has no UNIQUE (user_id, course_id) constraint;
    the hosted schema does not guarantee one either.

    Args:
        conn: An open sqlite3.Connection (foreign keys should already be ON).
    """
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS users (
            id            TEXT PRIMARY KEY,
            email         TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at    TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS courses (
            id          TEXT PRIMARY KEY,
            title       TEXT NOT NULL,
            description TEXT,
            instructor  TEXT,
            duration    TEXT,
            image_url   TEXT,
            created_at  TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS lessons (
            id          TEXT PRIMARY KEY,
            course_id   TEXT NOT NULL,
            title       TEXT NOT NULL,
            content     TEXT,
            order_index INTEGER NOT NULL DEFAULT 0,
            created_at  TEXT,
            FOREIGN KEY (course_id) REFERENCES courses (id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS user_progress (
            id           TEXT PRIMARY KEY,
            user_id      TEXT NOT NULL,
            course_id    TEXT NOT NULL,
            completed    INTEGER NOT NULL DEFAULT 0,
            completed_at TEXT,
            created_at   TEXT,
            FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE,
            FOREIGN KEY (course_id) REFERENCES courses (id) ON DELETE CASCADE
        );

        CREATE INDEX IF NOT EXISTS idx_lessons_course_id
            ON lessons (course_id);

        CREATE INDEX IF NOT EXISTS idx_user_progress_user_course
            ON user_progress (user_id, course_id);
    """)
    conn.commit()
