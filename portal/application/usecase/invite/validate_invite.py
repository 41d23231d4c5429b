"""Validate invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import UserRole


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    token: str


class ValidateInviteResponse(BaseModel):
    """Validate invite response."""

    email: str
    role: UserRole
    expires_at: datetime


class ValidateInviteUseCase:
    """Use case for validating an invite token.

    Lets the signup page check a link and prefill the form before the
    invitee registers.
    """

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize validate invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(
        self, request: ValidateInviteRequest
    ) -> Result[ValidateInviteResponse]:
        """Validate an invite token.

        Args:
            request: Validation request with token

        Returns:
            Ok with the invite's email, role and expiry, or Err explaining
            why the link cannot be used
        """
        with logfire.span("validate_invite.execute", token=request.token[:8] + "..."):
            result = await self.invite_service.validate_token(request.token)

            match result:
                case Ok(value=validated):
                    return Ok(
                        ValidateInviteResponse(
                            email=validated.email,
                            role=validated.role,
                            expires_at=validated.expires_at,
                        )
                    )
                case Err():
                    return result
