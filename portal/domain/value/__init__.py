"""Domain value objects for invitations."""

from portal.domain.value.identifiers import ActorId, InviteId
from portal.domain.value.types import (
    InviteClaims,
    InviteFilters,
    InviteStatus,
    InviteToken,
    UserRole,
)

__all__ = [
    # Identifiers
    "ActorId",
    "InviteId",
    # Types
    "InviteClaims",
    "InviteFilters",
    "InviteStatus",
    "InviteToken",
    "UserRole",
]
