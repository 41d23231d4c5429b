"""Domain value objects for invitations.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from portal.domain.value.common import RootValueObject, ValueObject
from portal.domain.value.identifiers import InviteId


class UserRole(str, Enum):
    """Role an invitee signs up with."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"

    @property
    def is_privileged(self) -> bool:
        """Privileged roles are restricted to the allowed email domains."""
        return self in (UserRole.ADMIN, UserRole.TEACHER)


class InviteStatus(str, Enum):
    """Status of an invite.

    ``pending`` is the only non-terminal state.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class InviteToken(RootValueObject[str]):
    """Opaque, URL-safe bearer token carried in the signup link."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Reject empty or oversized tokens before they reach the codec."""
        if len(v) < 1 or len(v) > 2048:
            raise ValueError("Token must be 1-2048 characters")
        return v


class InviteClaims(ValueObject):
    """Identity claims embedded in an invite token.

    Claims are never authoritative: they are always checked against the
    stored invite before anything is decided.
    """

    invite_id: InviteId
    email: str
    role: UserRole
    expires_at: datetime


class InviteFilters(ValueObject):
    """Filters for listing invites."""

    role: Optional[UserRole] = None
    status: Optional[InviteStatus] = None
    email: Optional[str] = Field(default=None, max_length=320)
