"""Audit trail for invite operations."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from portal.domain.model.invite import utc_now
from portal.domain.value import InviteId
from portal.domain.value.common import ValueObject


class AuditAction(str, Enum):
    """Audited invite actions."""

    CREATED = "invite.created"
    ACCEPTED = "invite.accepted"
    CANCELLED = "invite.cancelled"
    RESENT = "invite.resent"
    CLEANUP = "invite.cleanup"
    FAILED = "invite.failed"


class AuditEvent(ValueObject):
    """One audit record."""

    action: AuditAction
    actor: Optional[str] = None
    role: Optional[str] = None
    invite_id: Optional[InviteId] = None
    email: Optional[str] = None
    client_ip: Optional[str] = None
    status: str = "success"
    detail: Optional[str] = None
    occurred_at: datetime = Field(default_factory=utc_now)


class AuditSink:
    """Audit sink interface."""

    async def record(self, event: AuditEvent) -> None:
        """Persist or forward an audit event.

        Args:
            event: The event to record
        """
        raise NotImplementedError
