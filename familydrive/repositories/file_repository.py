"""File repository for database operations."""

import json
import sqlite3
from datetime import datetime
from typing import Dict, List, Optional

from common.logging_config import get_logger
from familydrive.database import get_db_connection, write_lock
from familydrive.models import FileEntity, SharingHistoryEntry

logger = get_logger(__name__)

_FILE_COLUMNS = """file_id, file_name, content_type, size, uploader_id, owner_id,
                   shared_with, uploaded_at, last_modified, storage_path"""


def _row_to_history_entry(row: sqlite3.Row) -> SharingHistoryEntry:
    return SharingHistoryEntry(
        entry_id=row["entry_id"],
        shared_by=row["shared_by"],
        shared_with=row["shared_with"],
        shared_at=datetime.fromisoformat(row["shared_at"]),
        parent_share_id=row["parent_share_id"],
    )


def _row_to_file(row: sqlite3.Row, history: List[SharingHistoryEntry]) -> FileEntity:
    return FileEntity(
        file_id=row["file_id"],
        file_name=row["file_name"],
        content_type=row["content_type"],
        size=row["size"],
        uploader_id=row["uploader_id"],
        owner_id=row["owner_id"],
        shared_with=json.loads(row["shared_with"]) if row["shared_with"] else [],
        sharing_history=history,
        uploaded_at=datetime.fromisoformat(row["uploaded_at"]),
        last_modified=datetime.fromisoformat(row["last_modified"]),
        storage_path=row["storage_path"],
    )


class FileRepository:
    @staticmethod
    def get_all_files() -> List[FileEntity]:
        logger.debug("Fetching all files")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_FILE_COLUMNS} FROM files ORDER BY position")
            rows = cursor.fetchall()

            cursor.execute(
                """SELECT entry_id, file_id, shared_by, shared_with, shared_at, parent_share_id
                   FROM sharing_history ORDER BY position"""
            )
            history_by_file: Dict[str, List[SharingHistoryEntry]] = {}
            for history_row in cursor.fetchall():
                history_by_file.setdefault(history_row["file_id"], []).append(
                    _row_to_history_entry(history_row)
                )

        files = [_row_to_file(row, history_by_file.get(row["file_id"], [])) for row in rows]
        logger.debug(f"Fetched {len(files)} files")
        return files

    @staticmethod
    def get_by_id(file_id: str) -> Optional[FileEntity]:
        logger.debug(f"Fetching file [file_id={file_id}]")
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_FILE_COLUMNS} FROM files WHERE file_id = ?",
                (file_id,)
            )
            row = cursor.fetchone()

            if row is None:
                logger.debug(f"File not found [file_id={file_id}]")
                return None

            cursor.execute(
                """SELECT entry_id, file_id, shared_by, shared_with, shared_at, parent_share_id
                   FROM sharing_history WHERE file_id = ? ORDER BY position""",
                (file_id,)
            )
            history = [_row_to_history_entry(history_row) for history_row in cursor.fetchall()]

        return _row_to_file(row, history)

    @staticmethod
    def save_file(file: FileEntity) -> None:
        logger.debug(f"Saving file [file_id={file.file_id}]")
        with write_lock, get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO files (file_id, file_name, content_type, size, uploader_id, owner_id,
                                       shared_with, uploaded_at, last_modified, storage_path)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(file_id) DO UPDATE SET
                        file_name = excluded.file_name,
                        content_type = excluded.content_type,
                        size = excluded.size,
                        owner_id = excluded.owner_id,
                        shared_with = excluded.shared_with,
                        last_modified = excluded.last_modified,
                        storage_path = excluded.storage_path
                    """,
                    (file.file_id, file.file_name, file.content_type, file.size,
                     file.uploader_id, file.owner_id, json.dumps(file.shared_with),
                     file.uploaded_at.isoformat(), file.last_modified.isoformat(),
                     file.storage_path)
                )

                # History rows are only ever added; entries already stored are kept.
                cursor.executemany(
                    """
                    INSERT OR IGNORE INTO sharing_history
                        (entry_id, file_id, shared_by, shared_with, shared_at, parent_share_id)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (entry.entry_id, file.file_id, entry.shared_by, entry.shared_with,
                         entry.shared_at.isoformat(), entry.parent_share_id)
                        for entry in file.sharing_history
                    ]
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Failed to save file [file_id={file.file_id}]: {e}", exc_info=True)
                raise

    @staticmethod
    def delete_file(file_id: str) -> None:
        logger.debug(f"Deleting file [file_id={file_id}]")
        with write_lock, get_db_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute("DELETE FROM sharing_history WHERE file_id = ?", (file_id,))
                cursor.execute("DELETE FROM files WHERE file_id = ?", (file_id,))
                conn.commit()
                logger.info(f"File deleted [file_id={file_id}]")
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Failed to delete file [file_id={file_id}]: {e}", exc_info=True)
                raise
