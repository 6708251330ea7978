"""Acting-user resolution for incoming requests."""

from typing import Optional

from fastapi import Header, HTTPException, Request, status

from familydrive.config import USER_ID_HEADER


async def get_current_user(
    request: Request,
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER),
) -> str:
    """
    FastAPI dependency to extract the acting user id.

    The header value is trusted as-is; it is only checked for presence.
    Whether the id resolves to a user is decided by the services.

    Args:
        request: Incoming request, used to record the actor for logging
        x_user_id: Value of the X-User-ID header

    Returns:
        user_id of the acting user

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {USER_ID_HEADER} header"
        )

    user_id = x_user_id.strip()
    request.state.user_id = user_id
    return user_id
