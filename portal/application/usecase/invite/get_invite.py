"""Get invite use case."""

from uuid import UUID

from pydantic import BaseModel

from portal.application.usecase.invite.common import InviteItem
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import InviteId


class GetInviteRequest(BaseModel):
    """Get invite request."""

    invite_id: UUID


class GetInviteUseCase:
    """Use case for reading one invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: GetInviteRequest) -> Result[InviteItem]:
        result = await self.invite_service.get_invite(InviteId(request.invite_id))

        match result:
            case Ok(value=invite):
                return Ok(InviteItem.from_invite(invite))
            case Err():
                return result
