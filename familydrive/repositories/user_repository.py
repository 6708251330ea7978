"""User repository for database operations."""

import json
import sqlite3
from datetime import datetime
from typing import List, Optional

from common.logging_config import get_logger
from familydrive.database import get_db_connection, username_key, write_lock
from familydrive.models import Role, User

logger = get_logger(__name__)

_USER_COLUMNS = """user_id, username, display_name, role, parent_id,
                   created_at, created_by, children_ids"""


def _row_to_user(row: sqlite3.Row) -> User:
    return User(
        user_id=row["user_id"],
        username=row["username"],
        display_name=row["display_name"],
        role=Role(row["role"]),
        parent_id=row["parent_id"],
        created_at=datetime.fromisoformat(row["created_at"]),
        created_by=row["created_by"],
        children_ids=json.loads(row["children_ids"]) if row["children_ids"] else [],
    )


class UserRepository:
    @staticmethod
    def get_all_users() -> List[User]:
        logger.debug("Fetching all users")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY position")
            users = [_row_to_user(row) for row in cursor.fetchall()]

        logger.debug(f"Fetched {len(users)} users")
        return users

    @staticmethod
    def get_by_user_id(user_id: str) -> Optional[User]:
        logger.debug(f"Fetching user by user_id: {user_id}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE user_id = ?",
                (user_id,)
            )
            row = cursor.fetchone()

        if row is None:
            logger.debug(f"User not found: {user_id}")
            return None

        return _row_to_user(row)

    @staticmethod
    def get_by_username(username: str) -> Optional[User]:
        logger.debug(f"Fetching user by username: {username}")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""SELECT {_USER_COLUMNS} FROM users
                   WHERE username_key = ?
                   ORDER BY position LIMIT 1""",
                (username_key(username),)
            )
            row = cursor.fetchone()

        if row is None:
            logger.debug(f"User not found: {username}")
            return None

        return _row_to_user(row)

    @staticmethod
    def save_user(user: User) -> None:
        logger.debug(f"Saving user: {user.username} [user_id={user.user_id}]")
        with write_lock, get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO users (user_id, username, username_key, display_name, role, parent_id,
                                       created_at, created_by, children_ids)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET
                        username = excluded.username,
                        username_key = excluded.username_key,
                        display_name = excluded.display_name,
                        role = excluded.role,
                        parent_id = excluded.parent_id,
                        created_at = excluded.created_at,
                        created_by = excluded.created_by,
                        children_ids = excluded.children_ids
                    """,
                    (user.user_id, user.username, username_key(user.username), user.display_name, user.role.value,
                     user.parent_id, user.created_at.isoformat(), user.created_by,
                     json.dumps(user.children_ids))
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Failed to save user {user.username}: {e}", exc_info=True)
                raise

    @staticmethod
    def delete_user(user_id: str) -> None:
        logger.debug(f"Deleting user [user_id={user_id}]")
        with write_lock, get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute("DELETE FROM users WHERE user_id = ?", (user_id,))
                conn.commit()
                logger.info(f"User deleted [user_id={user_id}]")
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Failed to delete user [user_id={user_id}]: {e}", exc_info=True)
                raise
