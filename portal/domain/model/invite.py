"""Invite entity.

An invite is an offer to join the portal with a given role at a given email
address. It is created by an admin, delivered as a signup link and consumed
exactly once when the invitee registers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from pydantic import Field, model_validator

from portal.domain.model.common import DomainModel
from portal.domain.value import ActorId, InviteClaims, InviteId, InviteStatus, UserRole


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - Status only moves pending -> accepted or pending -> expired
    - ``expires_at`` is always strictly after ``created_at``
    - Acceptance fields are only ever set on accepted invites
    """

    id: InviteId
    email: str
    role: UserRole
    status: InviteStatus = InviteStatus.PENDING
    invited_by: ActorId
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[ActorId] = None

    @model_validator(mode="after")
    def check_lifecycle(self) -> "Invite":
        """Validate timestamps and acceptance fields."""
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be after created_at")
        if self.status != InviteStatus.ACCEPTED and (
            self.accepted_at is not None or self.accepted_by is not None
        ):
            raise ValueError("Only accepted invites carry acceptance details")
        return self

    @classmethod
    def issue(
        cls,
        email: str,
        role: UserRole,
        invited_by: ActorId,
        ttl: timedelta,
        now: datetime | None = None,
    ) -> "Invite":
        """Build a fresh pending invite."""
        now = now or utc_now()
        return cls(
            id=InviteId(uuid4()),
            email=email,
            role=role,
            status=InviteStatus.PENDING,
            invited_by=invited_by,
            created_at=now,
            updated_at=now,
            expires_at=now + ttl,
        )

    @property
    def is_pending(self) -> bool:
        """Whether the invite can still transition."""
        return self.status == InviteStatus.PENDING

    def is_expired_at(self, now: datetime) -> bool:
        """Whether the invite's validity window has passed at ``now``."""
        return self.expires_at <= now

    def claims(self) -> InviteClaims:
        """Claims to embed in this invite's token."""
        return InviteClaims(
            invite_id=self.id,
            email=self.email,
            role=self.role,
            expires_at=self.expires_at,
        )
