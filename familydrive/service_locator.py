"""Service locator for the request handlers."""

from typing import Optional

from familydrive.services.file_service import FileService
from familydrive.services.user_service import UserService

_user_service: Optional[UserService] = None
_file_service: Optional[FileService] = None


def set_user_service(service: Optional[UserService]):
    """Set global user service instance"""
    global _user_service
    _user_service = service


def get_user_service() -> UserService:
    """Get global user service instance, falling back to the SQLite-backed default"""
    if _user_service is None:
        return UserService()
    return _user_service


def set_file_service(service: Optional[FileService]):
    """Set global file service instance"""
    global _file_service
    _file_service = service


def get_file_service() -> FileService:
    """Get global file service instance, falling back to the SQLite-backed default"""
    if _file_service is None:
        return FileService()
    return _file_service
