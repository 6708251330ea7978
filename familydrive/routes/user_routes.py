"""User management API routes."""

from fastapi import APIRouter, Depends, Response, status

from familydrive.auth import get_current_user
from familydrive.config import API_PREFIX
from familydrive.exceptions import NotFoundError
from familydrive.schemas.users import CreateUserRequest, UserResponse, UsersListResponse
from familydrive.service_locator import get_user_service
from familydrive.services.user_service import UserService

router = APIRouter(prefix=f"{API_PREFIX}/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    request: CreateUserRequest,
    response: Response,
    current_user: str = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    Create a new user with role-based restrictions.

    Admins can create Parents and Kids, Parents can create their own Kids only.

    Parameters:
        - username: Unique username, compared case-insensitively (3-50 chars)
        - display_name: Display name (1-100 chars)
        - role: Parent or Kid
        - parent_id: Required for Kid users
        - X-User-ID header: acting user (required)

    Returns:
        - The created user

    Raises:
        - 400: Missing or invalid parent, or username already exists
        - 401: Missing X-User-ID header
        - 403: Acting user unknown or not allowed to create this user
    """
    user = user_service.create_user(request, current_user).unwrap()
    response.headers["Location"] = f"{API_PREFIX}/users/{user.user_id}"
    return UserResponse.from_user(user)


@router.get("", response_model=UsersListResponse)
def list_users(
    current_user: str = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    List the users visible to the acting user.

    Admins see everyone, Parents see Admins, other Parents and their own Kids,
    Kids see themselves, their Parent and all other Kids.
    """
    users = user_service.list_visible_users(current_user).unwrap()
    return UsersListResponse(
        users=[UserResponse.from_user(user) for user in users],
        total_count=len(users),
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    current_user: str = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    Get a single user if the acting user may see them.

    Raises:
        - 403: Acting user unknown or not allowed to see this user
        - 404: User not found
    """
    user = user_service.get_user_by_id(user_id, current_user).unwrap()
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return UserResponse.from_user(user)
