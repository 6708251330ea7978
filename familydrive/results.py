"""Result values returned by the service layer.

Services never raise for expected failures; they return ``Ok`` or ``Err``.
The HTTP layer calls ``unwrap()``, which turns an ``Err`` into the matching
exception so the application exception handlers can map it to a response.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from familydrive.exceptions import (
    ActorNotFoundError,
    ConflictError,
    FamilyDriveError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    ACTOR_NOT_FOUND = "ACTOR_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    CONFLICT = "CONFLICT"


_EXCEPTIONS = {
    ErrorKind.ACTOR_NOT_FOUND: ActorNotFoundError,
    ErrorKind.PERMISSION_DENIED: PermissionDeniedError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_REQUEST: InvalidRequestError,
    ErrorKind.CONFLICT: ConflictError,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying exactly one error kind."""

    kind: ErrorKind
    message: str

    @property
    def is_ok(self) -> bool:
        return False

    def to_exception(self) -> FamilyDriveError:
        return _EXCEPTIONS[self.kind](self.message)

    def unwrap(self) -> Any:
        raise self.to_exception()


Result = Union[Ok[T], Err]
