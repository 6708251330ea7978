"""Stores raw file bytes on local disk."""

from pathlib import Path
from typing import Optional, Union

from common.logging_config import get_logger
from familydrive import config
from familydrive.exceptions import BlobNotFoundError
from familydrive.utils import safe_file_name

logger = get_logger(__name__)


class LocalBlobStorage:
    """
    Blob store backed by a directory.

    The storage path returned by save() is opaque to callers and is passed back
    unchanged to read() and delete().
    """

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = Path(root if root is not None else config.UPLOADS_PATH).resolve()

    def ensure_directory(self) -> None:
        """Ensure the uploads directory exists."""
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, file_id: str, file_name: str, data: bytes) -> str:
        """
        Write file bytes to disk.

        Args:
            file_id: UUID of the file
            file_name: Original file name, used as a readable suffix
            data: Raw file content

        Returns:
            String path to the written file

        Raises:
            OSError: If write operation fails
        """
        self.ensure_directory()
        filepath = self.root / f"{file_id}_{safe_file_name(file_name)}"
        filepath.write_bytes(data)
        logger.debug(f"Stored {len(data)} bytes at {filepath}")
        return str(filepath)

    def read(self, storage_path: str) -> bytes:
        """
        Read the bytes stored at storage_path.

        Raises:
            BlobNotFoundError: If nothing is stored at the path
        """
        if not self.exists(storage_path):
            logger.error(f"Blob missing on disk: {storage_path}")
            raise BlobNotFoundError("File content is missing from storage")
        return Path(storage_path).read_bytes()

    def delete(self, storage_path: str) -> bool:
        """
        Delete the bytes stored at storage_path.

        Returns:
            True if a file was deleted, False if it didn't exist
        """
        if self.exists(storage_path):
            Path(storage_path).unlink()
            return True
        return False

    def exists(self, storage_path: str) -> bool:
        return Path(storage_path).is_file()
