"""Result values returned at the invite service boundary.

Expected failures come back as ``Err`` instead of exceptions, so every
caller has to decide what to do with each :class:`InviteErrorKind`::

    match await invite_service.accept_invite(...):
        case Ok(value=invite):
            ...
        case Err(kind=InviteErrorKind.ALREADY_USED):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from portal.domain.error import InviteError, InviteErrorKind

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome with a user-safe message."""

    kind: InviteErrorKind
    message: str

    @classmethod
    def from_error(cls, error: InviteError) -> "Err":
        return cls(kind=error.kind, message=error.message)


Result = Union[Ok[T], Err]
