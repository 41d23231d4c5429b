"""Row <-> entity mapping for the invites table.

Entities are frozen pydantic models, so rows are mapped by hand rather than
through the ORM.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from portal.domain.model import Invite
from portal.domain.value import ActorId, InviteId, InviteStatus, UserRole


def row_to_invite(row: Mapping[str, Any]) -> Invite:
    """Build an Invite from an ``invites`` row mapping."""
    raw_id = row["id"]
    accepted_by = row.get("accepted_by")
    return Invite(
        id=InviteId(raw_id if isinstance(raw_id, UUID) else UUID(str(raw_id))),
        email=row["email"],
        role=UserRole(row["role"]),
        status=InviteStatus(row["status"]),
        invited_by=ActorId(row["invited_by"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        accepted_by=ActorId(accepted_by) if accepted_by else None,
    )


def invite_to_dict(invite: Invite) -> dict[str, Any]:
    """Column values for inserting ``invite``; enums go in as their labels."""
    return {
        **invite.model_dump(exclude={"role", "status"}),
        "role": invite.role.value,
        "status": invite.status.value,
    }
