"""Database schema and connection management for SQLite."""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from familydrive.config import DATABASE_PATH

# Serialises writes to the users and files collections within the process.
write_lock = threading.RLock()


def username_key(username: str) -> str:
    """Normalised form used to compare usernames regardless of case."""
    return username.casefold()


def _migrate_add_username_key(cursor: sqlite3.Cursor) -> None:
    """
    Add and backfill users.username_key on databases created before it existed.
    """
    cursor.execute("PRAGMA table_info(users)")
    columns = {row[1] for row in cursor.fetchall()}
    if "username_key" in columns:
        return

    cursor.execute("ALTER TABLE users ADD COLUMN username_key TEXT NOT NULL DEFAULT ''")
    cursor.execute("SELECT user_id, username FROM users")
    cursor.executemany(
        "UPDATE users SET username_key = ? WHERE user_id = ?",
        [(username_key(username), user_id) for user_id, username in cursor.fetchall()]
    )
    cursor.execute("DROP INDEX IF EXISTS idx_users_username")


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS users (
                position INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT UNIQUE NOT NULL,
                username TEXT NOT NULL,
                username_key TEXT NOT NULL,
                display_name TEXT NOT NULL,
                role TEXT NOT NULL,
                parent_id TEXT,
                created_at TEXT NOT NULL,
                created_by TEXT NOT NULL,
                children_ids TEXT NOT NULL DEFAULT '[]'
            )
        """)

        _migrate_add_username_key(cursor)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS files (
                position INTEGER PRIMARY KEY AUTOINCREMENT,
                file_id TEXT UNIQUE NOT NULL,
                file_name TEXT NOT NULL,
                content_type TEXT NOT NULL,
                size INTEGER NOT NULL,
                uploader_id TEXT NOT NULL,
                owner_id TEXT NOT NULL,
                shared_with TEXT NOT NULL DEFAULT '[]',
                uploaded_at TEXT NOT NULL,
                last_modified TEXT NOT NULL,
                storage_path TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS sharing_history (
                position INTEGER PRIMARY KEY AUTOINCREMENT,
                entry_id TEXT UNIQUE NOT NULL,
                file_id TEXT NOT NULL,
                shared_by TEXT NOT NULL,
                shared_with TEXT NOT NULL,
                shared_at TEXT NOT NULL,
                parent_share_id TEXT
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_users_username_key ON users(username_key)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_history_file_id ON sharing_history(file_id)
        """)

        conn.commit()


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()
