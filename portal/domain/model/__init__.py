"""Domain model entities for invitations."""

from portal.domain.model.invite import Invite

__all__ = [
    "Invite",
]
