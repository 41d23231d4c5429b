"""Session token verification."""

import logfire

from portal.config import AuthSettings
from portal.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Identifies callers from the login service's session JWT."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, email: str, role: str) -> str:
        """Issue a session token signed with this service's secret.

        Production sessions come from the login service; this is for
        operator tooling and tests.
        """
        return create_token(user_id, email, role, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a session token.

        Raises:
            JWTError: If the token is malformed, forged or expired
        """
        try:
            payload = verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Session token rejected", reason=str(e))
            raise
        logfire.debug("Session token accepted", user_id=payload.user_id, role=payload.role)
        return payload
