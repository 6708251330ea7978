"""Seeds a fresh database with a small family hierarchy for manual testing."""

from typing import List, Optional

from common.logging_config import get_logger
from familydrive.models import Role, User
from familydrive.repositories.protocols import UserStore
from familydrive.repositories.user_repository import UserRepository
from familydrive.utils import utcnow

logger = get_logger(__name__)

ADMIN_ID = "admin-001"
PARENT1_ID = "parent-001"
PARENT2_ID = "parent-002"
KID1_ID = "kid-001"
KID2_ID = "kid-002"
KID3_ID = "kid-003"


def build_test_users() -> List[User]:
    """
    Build the seed hierarchy: one Admin, two Parents, three Kids.

    parent-001 has kid-001 and kid-002, parent-002 has kid-003.
    """
    now = utcnow()
    return [
        User(user_id=ADMIN_ID, username="admin", display_name="System Administrator",
             role=Role.ADMIN, created_at=now, created_by="system"),
        User(user_id=PARENT1_ID, username="parent1", display_name="John Parent",
             role=Role.PARENT, created_at=now, created_by=ADMIN_ID,
             children_ids=[KID1_ID, KID2_ID]),
        User(user_id=PARENT2_ID, username="parent2", display_name="Jane Parent",
             role=Role.PARENT, created_at=now, created_by=ADMIN_ID,
             children_ids=[KID3_ID]),
        User(user_id=KID1_ID, username="kid1", display_name="Alice Kid",
             role=Role.KID, parent_id=PARENT1_ID, created_at=now, created_by=PARENT1_ID),
        User(user_id=KID2_ID, username="kid2", display_name="Bob Kid",
             role=Role.KID, parent_id=PARENT1_ID, created_at=now, created_by=PARENT1_ID),
        User(user_id=KID3_ID, username="kid3", display_name="Charlie Kid",
             role=Role.KID, parent_id=PARENT2_ID, created_at=now, created_by=PARENT2_ID),
    ]


def seed_test_data(user_repo: Optional[UserStore] = None) -> bool:
    """
    Insert the seed users when the user collection is empty.

    Args:
        user_repo: Store to seed, defaults to the SQLite repository

    Returns:
        True if users were inserted, False if data already existed
    """
    user_repo = user_repo if user_repo is not None else UserRepository()

    if user_repo.get_all_users():
        logger.info("Test data already exists, skipping initialization")
        return False

    logger.info("Initializing test data...")
    users = build_test_users()
    for user in users:
        user_repo.save_user(user)

    logger.info(f"Test data initialization completed. Created {len(users)} users")
    for user in users:
        logger.info(f"  {user.role.value}: {user.user_id} ({user.username})")

    return True
