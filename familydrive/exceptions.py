"""Custom exception classes for FamilyDrive."""


class FamilyDriveError(Exception):
    """
    Base exception class for all FamilyDrive errors.
    """
    pass


class ActorNotFoundError(FamilyDriveError):
    """
    Raised when the acting user id does not resolve to a user.
    """
    pass


class PermissionDeniedError(FamilyDriveError):
    """
    Raised when the actor exists but a role, ownership or sharing rule rejects the operation.
    """
    pass


class NotFoundError(FamilyDriveError):
    """
    Raised when a target user or file does not exist.
    """
    pass


class InvalidRequestError(FamilyDriveError):
    """
    Raised when the request is structurally invalid (missing or inconsistent fields).
    """
    pass


class ConflictError(FamilyDriveError):
    """
    Raised when a uniqueness rule is violated, e.g. a duplicate username.
    """
    pass


class BlobNotFoundError(FamilyDriveError):
    """
    Raised when file metadata exists but its bytes are missing from blob storage.
    """
    pass
