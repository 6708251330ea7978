"""Service layer for business logic."""

from familydrive.services.user_service import UserService
from familydrive.services.file_service import FileService

__all__ = [
    "UserService",
    "FileService",
]
