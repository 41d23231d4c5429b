"""Invite routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from portal.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
    CancelInviteRequest,
    CancelInviteUseCase,
    CheckEmailDomainRequest,
    CheckEmailDomainResponse,
    CheckEmailDomainUseCase,
    CreateBulkInvitesRequest,
    CreateBulkInvitesResponse,
    CreateBulkInvitesUseCase,
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    GetInviteHistoryRequest,
    GetInviteHistoryResponse,
    GetInviteHistoryUseCase,
    GetInviteRequest,
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
    GetInviteUseCase,
    InviteItem,
    ResendInviteRequest,
    ResendInviteResponse,
    ResendInviteUseCase,
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from portal.domain.result import Err, Ok
from portal.domain.service import JWTService
from portal.domain.value import InviteStatus, UserRole
from portal.interface.error import http_error
from portal.util.jwt import JWTError, TokenPayload

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class CreateInviteAPIRequest(BaseModel):
    """API request for creating an invite."""

    email: str = Field(max_length=320)
    role: UserRole


class CreateBulkInvitesAPIRequest(BaseModel):
    """API request for creating invites in bulk."""

    emails: list[str] = Field(min_length=1)
    role: UserRole


class ResendInviteAPIRequest(BaseModel):
    """API request for resending an invite."""

    email: str = Field(max_length=320)


class CheckDomainAPIRequest(BaseModel):
    """API request for checking an address against the domain policy."""

    email: str = Field(max_length=320)
    role: UserRole


class ValidateInviteAPIRequest(BaseModel):
    """API request for validating a signup link token."""

    token: str = Field(min_length=1, max_length=2048)


class AcceptInviteAPIRequest(BaseModel):
    """API request for accepting an invite after signup."""

    token: str = Field(min_length=1, max_length=2048)
    email: str = Field(max_length=320)
    role: UserRole


def client_ip(request: Request) -> str | None:
    """First X-Forwarded-For entry, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def authenticate(jwt_service: JWTService, auth_token: str | None) -> TokenPayload:
    """Verify the session cookie.

    Raises:
        HTTPException: 401 if the cookie is missing or invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


def require_admin(jwt_service: JWTService, auth_token: str | None) -> TokenPayload:
    """Verify the session cookie belongs to an admin.

    Raises:
        HTTPException: 401 if unauthenticated, 403 for non-admins
    """
    payload = authenticate(jwt_service, auth_token)
    if payload.role != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return payload


@router.post("", response_model=CreateInviteResponse, status_code=status.HTTP_201_CREATED)
async def create_invite(
    body: CreateInviteAPIRequest,
    request: Request,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInviteResponse:
    """Invite one person.

    Args:
        body: Email and role
        request: Incoming request (client IP)
        create_invite_use_case: Create invite use case from DI
        jwt_service: JWT service from DI
        auth_token: Admin session JWT from cookie

    Returns:
        Created invite and its signup link

    Raises:
        HTTPException: On authentication failure or a refused invite
    """
    admin = require_admin(jwt_service, auth_token)

    result = await create_invite_use_case.execute(
        CreateInviteRequest(
            email=body.email,
            role=body.role,
            invited_by=admin.user_id,
            client_ip=client_ip(request),
        )
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.post(
    "/bulk",
    response_model=CreateBulkInvitesResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_bulk_invites(
    body: CreateBulkInvitesAPIRequest,
    request: Request,
    create_bulk_invites_use_case: FromDishka[CreateBulkInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateBulkInvitesResponse:
    """Invite several people with the same role.

    Per-address failures are reported in ``failed``; the request itself
    only fails when the bulk rate limit or size limit refuses it.
    """
    admin = require_admin(jwt_service, auth_token)

    result = await create_bulk_invites_use_case.execute(
        CreateBulkInvitesRequest(
            emails=body.emails,
            role=body.role,
            invited_by=admin.user_id,
            client_ip=client_ip(request),
        )
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.get("", response_model=GetInvitesResponse)
async def get_invites(
    get_invites_use_case: FromDishka[GetInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    role: UserRole | None = Query(default=None),
    status_filter: InviteStatus | None = Query(default=None, alias="status"),
    email: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> GetInvitesResponse:
    """List invites, newest first.

    Args:
        get_invites_use_case: Get invites use case from DI
        jwt_service: JWT service from DI
        auth_token: Admin session JWT from cookie
        role: Optional role filter
        status_filter: Optional status filter (pending, accepted, expired)
        email: Optional exact email filter
        page: Page number, starting at 1
        limit: Page size (1-100)

    Returns:
        One page of invites with the total count
    """
    require_admin(jwt_service, auth_token)

    result = await get_invites_use_case.execute(
        GetInvitesRequest(
            role=role, status=status_filter, email=email, page=page, limit=limit
        )
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.get("/history", response_model=GetInviteHistoryResponse)
async def get_invite_history(
    get_invite_history_use_case: FromDishka[GetInviteHistoryUseCase],
    jwt_service: FromDishka[JWTService],
    email: str = Query(max_length=320),
    auth_token: str | None = Cookie(default=None),
) -> GetInviteHistoryResponse:
    """Every invite sent to an address, newest first."""
    require_admin(jwt_service, auth_token)

    result = await get_invite_history_use_case.execute(
        GetInviteHistoryRequest(email=email)
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.post("/resend", response_model=ResendInviteResponse)
async def resend_invite(
    body: ResendInviteAPIRequest,
    request: Request,
    resend_invite_use_case: FromDishka[ResendInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResendInviteResponse:
    """Reissue the pending invite for an address with a fresh expiry."""
    admin = require_admin(jwt_service, auth_token)

    result = await resend_invite_use_case.execute(
        ResendInviteRequest(
            email=body.email,
            invited_by=admin.user_id,
            client_ip=client_ip(request),
        )
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.post("/check-domain", response_model=CheckEmailDomainResponse)
async def check_domain(
    body: CheckDomainAPIRequest,
    check_email_domain_use_case: FromDishka[CheckEmailDomainUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CheckEmailDomainResponse:
    """Check whether an address may be invited with a role."""
    require_admin(jwt_service, auth_token)

    result = await check_email_domain_use_case.execute(
        CheckEmailDomainRequest(email=body.email, role=body.role)
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.post("/validate", response_model=ValidateInviteResponse)
async def validate_invite(
    body: ValidateInviteAPIRequest,
    validate_invite_use_case: FromDishka[ValidateInviteUseCase],
) -> ValidateInviteResponse:
    """Validate a signup link token.

    Public endpoint used by the signup page before registration.

    Args:
        body: Token from the signup link
        validate_invite_use_case: Validate invite use case from DI

    Returns:
        Email, role and expiry of the invite

    Raises:
        HTTPException: 400 invalid, 404 unknown, 409 used, 410 expired
    """
    result = await validate_invite_use_case.execute(
        ValidateInviteRequest(token=body.token)
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.post("/accept", response_model=AcceptInviteResponse)
async def accept_invite(
    body: AcceptInviteAPIRequest,
    request: Request,
    accept_invite_use_case: FromDishka[AcceptInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptInviteResponse:
    """Accept an invite with the newly registered user's session.

    Args:
        body: Token plus the email and role the user registered with
        request: Incoming request (client IP)
        accept_invite_use_case: Accept invite use case from DI
        jwt_service: JWT service from DI
        auth_token: New user's session JWT from cookie

    Returns:
        The accepted invite
    """
    user = authenticate(jwt_service, auth_token)

    result = await accept_invite_use_case.execute(
        AcceptInviteRequest(
            token=body.token,
            email=body.email,
            role=body.role,
            accepted_by=user.user_id,
            client_ip=client_ip(request),
        )
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.get("/{invite_id}", response_model=InviteItem)
async def get_invite(
    invite_id: UUID,
    get_invite_use_case: FromDishka[GetInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> InviteItem:
    """Read one invite."""
    require_admin(jwt_service, auth_token)

    result = await get_invite_use_case.execute(GetInviteRequest(invite_id=invite_id))

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)


@router.delete("/{invite_id}", response_model=InviteItem)
async def cancel_invite(
    invite_id: UUID,
    request: Request,
    cancel_invite_use_case: FromDishka[CancelInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> InviteItem:
    """Cancel a pending invite."""
    admin = require_admin(jwt_service, auth_token)

    result = await cancel_invite_use_case.execute(
        CancelInviteRequest(
            invite_id=invite_id,
            cancelled_by=admin.user_id,
            client_ip=client_ip(request),
        )
    )

    match result:
        case Ok(value=response):
            return response
        case Err() as err:
            raise http_error(err)
