"""Cleanup expired invites use case."""

import logfire
from pydantic import BaseModel

from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService


class CleanupExpiredInvitesResponse(BaseModel):
    """Cleanup outcome."""

    expired_count: int
    invite_ids: list[str]


class CleanupExpiredInvitesUseCase:
    """Use case run by the scheduler to expire overdue invites."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize cleanup use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self) -> Result[CleanupExpiredInvitesResponse]:
        with logfire.span("cleanup_expired_invites.execute"):
            result = await self.invite_service.cleanup_expired_invites()

            match result:
                case Ok(value=invite_ids):
                    return Ok(
                        CleanupExpiredInvitesResponse(
                            expired_count=len(invite_ids),
                            invite_ids=[str(i) for i in invite_ids],
                        )
                    )
                case Err():
                    return result
