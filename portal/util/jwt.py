"""Session JWT helpers (PyJWT).

The portal's login service issues session tokens and this service verifies
them to identify the caller. ``create_token`` exists for tooling and tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from portal.config import AuthSettings

# Tolerated clock drift between the login service and this one
CLOCK_SKEW = timedelta(seconds=30)


class TokenPayload(BaseModel):
    """Claims carried by a session token."""

    user_id: str
    email: str
    role: str
    iat: datetime | None = None
    exp: datetime


class JWTError(Exception):
    """Session token is missing its signature, malformed or expired."""

    pass


def create_token(user_id: str, email: str, role: str, settings: AuthSettings) -> str:
    """Sign a session token for ``user_id`` valid for ``jwt_expiry_days``."""
    now = datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature and expiry, then parse the claims.

    Raises:
        JWTError: "Token has expired" or "Invalid token"
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=CLOCK_SKEW,
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        raise JWTError("Invalid token") from e
