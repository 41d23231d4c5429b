"""Accept invite use case."""

import logfire
from pydantic import BaseModel

from portal.application.usecase.invite.common import InviteItem
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import ActorId, UserRole


class AcceptInviteRequest(BaseModel):
    """Accept invite request."""

    token: str
    email: str
    role: UserRole
    accepted_by: str  # New user's ID from their session
    client_ip: str | None = None


class AcceptInviteResponse(BaseModel):
    """Accept invite response."""

    invite: InviteItem


class AcceptInviteUseCase:
    """Use case for consuming an invite after signup.

    The token is validated first to find the invite; the service then
    re-checks everything against the locked row before accepting.
    """

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize accept invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: AcceptInviteRequest) -> Result[AcceptInviteResponse]:
        """Execute accept invite flow.

        Args:
            request: Accept invite request

        Returns:
            Ok with the accepted invite, or the first Err encountered
        """
        with logfire.span("accept_invite.execute", accepted_by=request.accepted_by):
            validated = await self.invite_service.validate_token(request.token)
            if isinstance(validated, Err):
                return validated

            result = await self.invite_service.accept_invite(
                invite_id=validated.value.invite_id,
                email=request.email,
                role=request.role,
                accepted_by=ActorId(request.accepted_by),
                client_ip=request.client_ip,
            )

            match result:
                case Ok(value=invite):
                    return Ok(AcceptInviteResponse(invite=InviteItem.from_invite(invite)))
                case Err():
                    return result
