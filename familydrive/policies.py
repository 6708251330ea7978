"""Role hierarchy rules for user creation, visibility and file sharing.

Every function here is a pure predicate over roles and user records; nothing
reads from or writes to storage.
"""

from typing import Optional

from familydrive.models import Role, User


_CREATABLE_ROLES = {
    Role.ADMIN: frozenset({Role.PARENT, Role.KID}),
    Role.PARENT: frozenset({Role.KID}),
    Role.KID: frozenset(),
}


def can_create(creator_role: Role, target_role: Role) -> bool:
    """
    Check whether a user with creator_role may create a user with target_role.

    Args:
        creator_role: Role of the acting user
        target_role: Role requested for the new user

    Returns:
        True if the hierarchy allows the creation
    """
    return target_role in _CREATABLE_ROLES.get(creator_role, frozenset())


def can_create_kid_under(creator_role: Role, creator_id: str, parent_id: Optional[str]) -> bool:
    """
    Check whether the creator may attach a new Kid to parent_id.

    Parents may only attach Kids to themselves; Admins may attach to any Parent.
    """
    if creator_role == Role.ADMIN:
        return True
    if creator_role == Role.PARENT:
        return creator_id == parent_id
    return False


def can_view(viewer: User, target: User) -> bool:
    """
    Check whether viewer may see target.

    Admins see everyone. Parents see Admins, Parents and their own Kids.
    Kids see themselves, their parent and every Kid in the system.
    """
    if viewer.role == Role.ADMIN:
        return True

    if viewer.role == Role.PARENT:
        if target.role in (Role.ADMIN, Role.PARENT):
            return True
        return target.role == Role.KID and target.parent_id == viewer.user_id

    if viewer.role == Role.KID:
        return (
            target.user_id == viewer.user_id
            or target.user_id == viewer.parent_id
            or target.role == Role.KID
        )

    return False


def can_share_with(sharer: User, target: User) -> bool:
    """
    Check whether sharer may share a file with target.

    Admins share with anyone, Parents with other Parents and their own Kids,
    Kids with any Kid.
    """
    if sharer.role == Role.ADMIN:
        return True

    if sharer.role == Role.PARENT:
        if target.role == Role.PARENT:
            return True
        return target.role == Role.KID and target.parent_id == sharer.user_id

    if sharer.role == Role.KID:
        return target.role == Role.KID

    return False
