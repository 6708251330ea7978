"""Storage interfaces the services depend on.

Each method call is expected to be atomic on its own. Callers hold no lock
across a read followed by a save, so concurrent read-modify-write sequences on
the same record are last-write-wins.
"""

from typing import List, Optional, Protocol, runtime_checkable

from familydrive.models import FileEntity, User


@runtime_checkable
class UserStore(Protocol):
    def get_all_users(self) -> List[User]:
        """Return every user in insertion order."""
        ...

    def get_by_user_id(self, user_id: str) -> Optional[User]:
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """Look a user up by username, ignoring case."""
        ...

    def save_user(self, user: User) -> None:
        """Insert the user or replace the stored record with the same id."""
        ...

    def delete_user(self, user_id: str) -> None:
        ...


@runtime_checkable
class FileStore(Protocol):
    def get_all_files(self) -> List[FileEntity]:
        """Return every file in insertion order."""
        ...

    def get_by_id(self, file_id: str) -> Optional[FileEntity]:
        ...

    def save_file(self, file: FileEntity) -> None:
        """Insert the file or replace the stored record with the same id.

        Sharing history is append-only: entries already stored are never removed.
        """
        ...

    def delete_file(self, file_id: str) -> None:
        ...
