"""User creation and visibility service."""

from typing import List, Optional

from common.logging_config import get_logger
from familydrive.models import Role, User
from familydrive.policies import can_create, can_create_kid_under, can_view
from familydrive.repositories.protocols import UserStore
from familydrive.repositories.user_repository import UserRepository
from familydrive.results import Err, ErrorKind, Ok, Result
from familydrive.schemas.users import CreateUserRequest
from familydrive.utils import generate_uuid, utcnow

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: Optional[UserStore] = None):
        self.user_repo = user_repo if user_repo is not None else UserRepository()

    def create_user(self, request: CreateUserRequest, creator_id: str) -> Result[User]:
        """
        Create a user on behalf of creator_id.

        A new Kid is written in two steps: the Kid record first, then the
        parent's children list. The steps are not atomic. If the parent update
        fails the Kid record is removed again and the error propagates; if the
        parent has disappeared in between, the Kid is removed and the result is
        INVALID_REQUEST.
        """
        logger.info(f"Attempting to create {request.role.value} '{request.username}' [creator_id={creator_id}]")

        creator = self.user_repo.get_by_user_id(creator_id)
        if creator is None:
            logger.warning(f"Create user failed: creator not found [creator_id={creator_id}]")
            return Err(ErrorKind.ACTOR_NOT_FOUND, "Creator user not found")

        if not can_create(creator.role, request.role):
            logger.warning(
                f"Create user denied: {creator.role.value} cannot create {request.role.value} "
                f"[creator_id={creator_id}]"
            )
            return Err(
                ErrorKind.PERMISSION_DENIED,
                f"{creator.role.value} users cannot create {request.role.value} users",
            )

        if request.role == Role.KID:
            if not request.parent_id:
                return Err(ErrorKind.INVALID_REQUEST, "parent_id is required for Kid users")

            parent = self.user_repo.get_by_user_id(request.parent_id)
            if parent is None or parent.role != Role.PARENT:
                return Err(ErrorKind.INVALID_REQUEST, "Invalid parent user")

            if not can_create_kid_under(creator.role, creator.user_id, request.parent_id):
                logger.warning(
                    f"Create user denied: parent {creator_id} cannot attach a Kid to {request.parent_id}"
                )
                return Err(ErrorKind.PERMISSION_DENIED, "Parents can only create their own Kids")
        elif request.parent_id:
            return Err(ErrorKind.INVALID_REQUEST, "parent_id is only allowed for Kid users")

        if self.user_repo.get_by_username(request.username) is not None:
            logger.warning(f"Create user failed: username '{request.username}' already exists")
            return Err(ErrorKind.CONFLICT, "Username already exists")

        user = User(
            user_id=generate_uuid(),
            username=request.username,
            display_name=request.display_name,
            role=request.role,
            parent_id=request.parent_id if request.role == Role.KID else None,
            created_at=utcnow(),
            created_by=creator.user_id,
        )
        self.user_repo.save_user(user)

        if user.role == Role.KID and not self._attach_to_parent(user):
            return Err(ErrorKind.INVALID_REQUEST, "Invalid parent user")

        logger.info(f"Created {user.role.value} '{user.username}' [user_id={user.user_id}]")
        return Ok(user)

    def _attach_to_parent(self, kid: User) -> bool:
        parent = self.user_repo.get_by_user_id(kid.parent_id)
        if parent is None:
            logger.warning(
                f"Parent vanished before children update, removing kid {kid.user_id} [parent_id={kid.parent_id}]"
            )
            self.user_repo.delete_user(kid.user_id)
            return False

        if kid.user_id not in parent.children_ids:
            parent.children_ids.append(kid.user_id)

        try:
            self.user_repo.save_user(parent)
        except Exception as e:
            logger.error(
                f"Failed to update children of parent {parent.user_id}, removing kid {kid.user_id}: {e}",
                exc_info=True
            )
            self.user_repo.delete_user(kid.user_id)
            raise

        return True

    def list_visible_users(self, actor_id: str) -> Result[List[User]]:
        actor = self.user_repo.get_by_user_id(actor_id)
        if actor is None:
            logger.warning(f"List users failed: actor not found [actor_id={actor_id}]")
            return Err(ErrorKind.ACTOR_NOT_FOUND, "User not found")

        visible = [user for user in self.user_repo.get_all_users() if can_view(actor, user)]
        logger.debug(f"{len(visible)} users visible to {actor_id}")
        return Ok(visible)

    def get_user_by_id(self, target_id: str, requester_id: str) -> Result[Optional[User]]:
        """
        Fetch a single user as seen by requester_id.

        A missing target is not an error: the result is Ok(None).
        """
        requester = self.user_repo.get_by_user_id(requester_id)
        if requester is None:
            logger.warning(f"Get user failed: requester not found [requester_id={requester_id}]")
            return Err(ErrorKind.ACTOR_NOT_FOUND, "Requester user not found")

        target = self.user_repo.get_by_user_id(target_id)
        if target is None:
            return Ok(None)

        if not can_view(requester, target):
            logger.warning(f"Get user denied: {requester_id} cannot view {target_id}")
            return Err(ErrorKind.PERMISSION_DENIED, "Access denied to this user")

        return Ok(target)
