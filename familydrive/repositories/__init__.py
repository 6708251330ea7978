"""Repository layer for data access."""

from familydrive.repositories.protocols import UserStore, FileStore
from familydrive.repositories.user_repository import UserRepository
from familydrive.repositories.file_repository import FileRepository
from familydrive.repositories.memory import InMemoryUserRepository, InMemoryFileRepository

__all__ = [
    "UserStore",
    "FileStore",
    "UserRepository",
    "FileRepository",
    "InMemoryUserRepository",
    "InMemoryFileRepository",
]
