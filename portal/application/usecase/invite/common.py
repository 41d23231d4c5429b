"""Response models shared by invite use cases."""

from datetime import datetime

from pydantic import BaseModel

from portal.domain.model import Invite
from portal.domain.value import InviteStatus, UserRole


class InviteItem(BaseModel):
    """Invite item in responses."""

    invite_id: str
    email: str
    role: UserRole
    status: InviteStatus
    invited_by: str
    created_at: datetime
    expires_at: datetime
    accepted_at: datetime | None = None
    accepted_by: str | None = None

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteItem":
        return cls(
            invite_id=str(invite.id),
            email=invite.email,
            role=invite.role,
            status=invite.status,
            invited_by=invite.invited_by,
            created_at=invite.created_at,
            expires_at=invite.expires_at,
            accepted_at=invite.accepted_at,
            accepted_by=invite.accepted_by,
        )
