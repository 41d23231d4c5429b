"""Get invites use case."""

from pydantic import BaseModel, Field

from portal.application.usecase.invite.common import InviteItem
from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import InviteFilters, InviteStatus, UserRole


class GetInvitesRequest(BaseModel):
    """Get invites request."""

    role: UserRole | None = None
    status: InviteStatus | None = None
    email: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class GetInvitesResponse(BaseModel):
    """Get invites response."""

    invites: list[InviteItem]
    total: int
    page: int
    limit: int


class GetInvitesUseCase:
    """Use case for the admin invite listing."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize get invites use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: GetInvitesRequest) -> Result[GetInvitesResponse]:
        """Execute get invites flow.

        Args:
            request: Filters and pagination

        Returns:
            Ok with one page of invites, newest first
        """
        filters = InviteFilters(
            role=request.role, status=request.status, email=request.email
        )
        result = await self.invite_service.list_invites(
            filters, page=request.page, limit=request.limit
        )

        match result:
            case Ok(value=page):
                return Ok(
                    GetInvitesResponse(
                        invites=[InviteItem.from_invite(i) for i in page.invites],
                        total=page.total,
                        page=page.page,
                        limit=page.limit,
                    )
                )
            case Err():
                return result
