"""Interface layer errors.

Maps invite error kinds onto HTTP responses. The body always has the shape
``{"detail": {"code": <kind>, "message": <user-safe message>}}``.
"""

from fastapi import HTTPException, status

from portal.domain.error import InviteErrorKind
from portal.domain.result import Err

ERROR_STATUS: dict[InviteErrorKind, int] = {
    InviteErrorKind.INVALID_EMAIL_FORMAT: status.HTTP_400_BAD_REQUEST,
    InviteErrorKind.DOMAIN_NOT_ALLOWED: status.HTTP_400_BAD_REQUEST,
    InviteErrorKind.INVALID_TOKEN: status.HTTP_400_BAD_REQUEST,
    InviteErrorKind.EMAIL_MISMATCH: status.HTTP_400_BAD_REQUEST,
    InviteErrorKind.ROLE_MISMATCH: status.HTTP_400_BAD_REQUEST,
    InviteErrorKind.EXPIRED_TOKEN: status.HTTP_410_GONE,
    InviteErrorKind.EXPIRED: status.HTTP_410_GONE,
    InviteErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    InviteErrorKind.NO_PENDING_INVITE: status.HTTP_404_NOT_FOUND,
    InviteErrorKind.ALREADY_USED: status.HTTP_409_CONFLICT,
    InviteErrorKind.ALREADY_PROCESSED: status.HTTP_409_CONFLICT,
    InviteErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    InviteErrorKind.SPAM: status.HTTP_429_TOO_MANY_REQUESTS,
    InviteErrorKind.SEND_FAILED: status.HTTP_502_BAD_GATEWAY,
    InviteErrorKind.STORE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def http_error(err: Err) -> HTTPException:
    """Build the HTTP exception for a failed invite operation."""
    return HTTPException(
        status_code=ERROR_STATUS[err.kind],
        detail={"code": err.kind.value, "message": err.message},
    )
