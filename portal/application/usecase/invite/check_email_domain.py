"""Check email domain use case."""

from pydantic import BaseModel

from portal.domain.result import Err, Ok, Result
from portal.domain.service import InviteService
from portal.domain.value import UserRole


class CheckEmailDomainRequest(BaseModel):
    """Check email domain request."""

    email: str
    role: UserRole


class CheckEmailDomainResponse(BaseModel):
    """Check email domain response."""

    valid: bool
    email: str


class CheckEmailDomainUseCase:
    """Use case for checking an address before inviting it."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: CheckEmailDomainRequest
    ) -> Result[CheckEmailDomainResponse]:
        result = await self.invite_service.check_email_domain(request.email, request.role)

        match result:
            case Ok(value=normalized):
                return Ok(CheckEmailDomainResponse(valid=True, email=normalized))
            case Err():
                return result
