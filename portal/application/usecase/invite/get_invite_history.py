"""Get invite history use case."""

from pydantic import BaseModel

from portal.application.usecase.invite.common import InviteItem
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService


class GetInviteHistoryRequest(BaseModel):
    """Get invite history request."""

    email: str


class GetInviteHistoryResponse(BaseModel):
    """Every invite sent to an address, newest first."""

    email: str
    invites: list[InviteItem]


class GetInviteHistoryUseCase:
    """Use case for the per-address invite history."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: GetInviteHistoryRequest
    ) -> Result[GetInviteHistoryResponse]:
        result = await self.invite_service.get_invite_history(request.email)

        match result:
            case Ok(value=invites):
                return Ok(
                    GetInviteHistoryResponse(
                        email=request.email.strip().lower(),
                        invites=[InviteItem.from_invite(i) for i in invites],
                    )
                )
            case Err():
                return result
