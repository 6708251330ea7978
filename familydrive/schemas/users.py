"""Pydantic schemas for user endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from familydrive.models import Role, User


class CreateUserRequest(BaseModel):
    """Request model for user creation."""
    username: str = Field(..., min_length=3, max_length=50)
    display_name: str = Field(..., min_length=1, max_length=100)
    role: Role
    parent_id: Optional[str] = None


class UserResponse(BaseModel):
    """Public view of a user."""
    id: str
    username: str
    display_name: str
    role: Role
    parent_id: Optional[str] = None
    created_at: datetime
    created_by: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.user_id,
            username=user.username,
            display_name=user.display_name,
            role=user.role,
            parent_id=user.parent_id,
            created_at=user.created_at,
            created_by=user.created_by,
        )


class UsersListResponse(BaseModel):
    """Response model for user listing."""
    users: List[UserResponse]
    total_count: int
