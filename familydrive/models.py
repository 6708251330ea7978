"""Domain types shared by the services and repositories."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Role(str, Enum):
    """
    User roles in the hierarchy.

    Admins create Parents and Kids, Parents create their own Kids, Kids create nobody.
    """
    ADMIN = "Admin"
    PARENT = "Parent"
    KID = "Kid"


@dataclass
class User:
    user_id: str
    username: str
    display_name: str
    role: Role
    created_at: datetime
    created_by: str
    parent_id: Optional[str] = None
    children_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SharingHistoryEntry:
    """
    One accepted share of a file with a user.

    Entries are append-only; parent_share_id is reserved for share chains and
    is currently always None.
    """
    entry_id: str
    shared_by: str
    shared_with: str
    shared_at: datetime
    parent_share_id: Optional[str] = None


@dataclass
class FileEntity:
    file_id: str
    file_name: str
    content_type: str
    size: int
    uploader_id: str
    owner_id: str
    uploaded_at: datetime
    last_modified: datetime
    storage_path: str
    shared_with: List[str] = field(default_factory=list)
    sharing_history: List[SharingHistoryEntry] = field(default_factory=list)


@dataclass(frozen=True)
class FileContent:
    """Raw bytes of a file together with what is needed to serve them."""
    content: bytes
    content_type: str
    file_name: str


@dataclass(frozen=True)
class ShareOutcome:
    """
    Result of a share request.

    shared_with only lists the targets that passed validation; unknown ids and
    rejected targets are dropped without being reported.
    """
    file_id: str
    shared_with: List[str]
    shared_at: datetime
