"""Pydantic schemas for API requests and responses."""

from familydrive.schemas.users import (
    CreateUserRequest,
    UserResponse,
    UsersListResponse
)
from familydrive.schemas.files import (
    SharingHistoryEntryResponse,
    FileMetadataResponse,
    FilesListResponse,
    UploadFileResponse,
    ShareFileRequest,
    ShareFileResponse
)
from familydrive.schemas.common import (
    ErrorResponse,
    HealthResponse,
    EndpointInfo,
    StatusResponse
)

__all__ = [
    "CreateUserRequest",
    "UserResponse",
    "UsersListResponse",
    "SharingHistoryEntryResponse",
    "FileMetadataResponse",
    "FilesListResponse",
    "UploadFileResponse",
    "ShareFileRequest",
    "ShareFileResponse",
    "ErrorResponse",
    "HealthResponse",
    "EndpointInfo",
    "StatusResponse"
]
