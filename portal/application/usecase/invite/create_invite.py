"""Create invite use case."""

import logfire
from pydantic import BaseModel

from portal.application.usecase.invite.common import InviteItem
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import ActorId, UserRole


class CreateInviteRequest(BaseModel):
    """Create invite request."""

    email: str
    role: UserRole
    invited_by: str  # Admin user ID from auth
    client_ip: str | None = None


class CreateInviteResponse(BaseModel):
    """Create invite response."""

    invite: InviteItem
    signup_url: str


class CreateInviteUseCase:
    """Use case for inviting a single person."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize create invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: CreateInviteRequest) -> Result[CreateInviteResponse]:
        """Execute create invite flow.

        Args:
            request: Create invite request

        Returns:
            Ok with the created invite and its signup link, or the service Err
        """
        with logfire.span("create_invite.execute", role=request.role.value):
            result = await self.invite_service.create_invite(
                email=request.email,
                role=request.role,
                invited_by=ActorId(request.invited_by),
                client_ip=request.client_ip,
            )

            match result:
                case Ok(value=issued):
                    return Ok(
                        CreateInviteResponse(
                            invite=InviteItem.from_invite(issued.invite),
                            signup_url=issued.signup_url,
                        )
                    )
                case Err():
                    return result
