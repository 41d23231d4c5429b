"""Cancel invite use case."""

from uuid import UUID

from pydantic import BaseModel

from portal.application.usecase.invite.common import InviteItem
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import ActorId, InviteId


class CancelInviteRequest(BaseModel):
    """Cancel invite request."""

    invite_id: UUID
    cancelled_by: str  # Admin user ID from auth
    client_ip: str | None = None


class CancelInviteUseCase:
    """Use case for cancelling a pending invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: CancelInviteRequest) -> Result[InviteItem]:
        result = await self.invite_service.cancel_invite(
            invite_id=InviteId(request.invite_id),
            cancelled_by=ActorId(request.cancelled_by),
            client_ip=request.client_ip,
        )

        match result:
            case Ok(value=invite):
                return Ok(InviteItem.from_invite(invite))
            case Err():
                return result
