"""Resend invite use case."""

import logfire
from pydantic import BaseModel

from portal.application.usecase.invite.common import InviteItem
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import ActorId


class ResendInviteRequest(BaseModel):
    """Resend invite request."""

    email: str
    invited_by: str  # Admin user ID from auth
    client_ip: str | None = None


class ResendInviteResponse(BaseModel):
    """Resend invite response."""

    invite: InviteItem
    signup_url: str


class ResendInviteUseCase:
    """Use case for reissuing the pending invite of an address."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize resend invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: ResendInviteRequest) -> Result[ResendInviteResponse]:
        with logfire.span("resend_invite.execute"):
            result = await self.invite_service.resend_invite(
                email=request.email,
                invited_by=ActorId(request.invited_by),
                client_ip=request.client_ip,
            )

            match result:
                case Ok(value=issued):
                    return Ok(
                        ResendInviteResponse(
                            invite=InviteItem.from_invite(issued.invite),
                            signup_url=issued.signup_url,
                        )
                    )
                case Err():
                    return result
