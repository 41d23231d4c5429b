"""Create bulk invites use case."""

import logfire
from pydantic import BaseModel, Field

from portal.application.usecase.invite.common import InviteItem
from portal.domain.error import InviteErrorKind
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import ActorId, UserRole


class CreateBulkInvitesRequest(BaseModel):
    """Create bulk invites request."""

    emails: list[str] = Field(min_length=1)
    role: UserRole
    invited_by: str  # Admin user ID from auth
    client_ip: str | None = None


class FailedInviteItem(BaseModel):
    """An address that could not be invited."""

    email: str
    code: InviteErrorKind
    reason: str


class CreateBulkInvitesResponse(BaseModel):
    """Create bulk invites response."""

    successful: list[InviteItem]
    failed: list[FailedInviteItem]


class CreateBulkInvitesUseCase:
    """Use case for inviting several people with the same role."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize create bulk invites use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(
        self, request: CreateBulkInvitesRequest
    ) -> Result[CreateBulkInvitesResponse]:
        """Execute bulk invite flow.

        Args:
            request: Bulk invite request

        Returns:
            Ok with per-address outcomes, or Err if the whole request was refused
        """
        with logfire.span(
            "create_bulk_invites.execute",
            role=request.role.value,
            count=len(request.emails),
        ):
            result = await self.invite_service.create_bulk_invites(
                emails=request.emails,
                role=request.role,
                invited_by=ActorId(request.invited_by),
                client_ip=request.client_ip,
            )

            match result:
                case Ok(value=report):
                    return Ok(
                        CreateBulkInvitesResponse(
                            successful=[
                                InviteItem.from_invite(issued.invite)
                                for issued in report.successful
                            ],
                            failed=[
                                FailedInviteItem(
                                    email=failure.email,
                                    code=failure.kind,
                                    reason=failure.message,
                                )
                                for failure in report.failed
                            ],
                        )
                    )
                case Err():
                    return result
