"""Pydantic schemas for file endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from familydrive.models import FileEntity, SharingHistoryEntry, ShareOutcome


class SharingHistoryEntryResponse(BaseModel):
    """One entry of a file's sharing history."""
    shared_by: str
    shared_with: str
    shared_at: datetime
    parent_share_id: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: SharingHistoryEntry) -> "SharingHistoryEntryResponse":
        return cls(
            shared_by=entry.shared_by,
            shared_with=entry.shared_with,
            shared_at=entry.shared_at,
            parent_share_id=entry.parent_share_id,
        )


class FileMetadataResponse(BaseModel):
    """Response model for file metadata."""
    id: str
    file_name: str
    content_type: str
    size: int
    uploader_id: str
    owner_id: str
    shared_with: List[str]
    sharing_history: List[SharingHistoryEntryResponse]
    uploaded_at: datetime
    last_modified: datetime

    @classmethod
    def from_file(cls, file: FileEntity) -> "FileMetadataResponse":
        return cls(
            id=file.file_id,
            file_name=file.file_name,
            content_type=file.content_type,
            size=file.size,
            uploader_id=file.uploader_id,
            owner_id=file.owner_id,
            shared_with=list(file.shared_with),
            sharing_history=[SharingHistoryEntryResponse.from_entry(e) for e in file.sharing_history],
            uploaded_at=file.uploaded_at,
            last_modified=file.last_modified,
        )


class FilesListResponse(BaseModel):
    """Response model for file listing."""
    files: List[FileMetadataResponse]
    total_count: int


class UploadFileResponse(BaseModel):
    """Response model for file upload."""
    file_id: str
    file_name: str
    size: int
    content_type: str
    uploaded_at: datetime


class ShareFileRequest(BaseModel):
    """Request model for sharing a file."""
    user_ids: List[str]


class ShareFileResponse(BaseModel):
    """Response model for file sharing."""
    file_id: str
    shared_with: List[str]
    shared_at: datetime

    @classmethod
    def from_outcome(cls, outcome: ShareOutcome) -> "ShareFileResponse":
        return cls(
            file_id=outcome.file_id,
            shared_with=list(outcome.shared_with),
            shared_at=outcome.shared_at,
        )
