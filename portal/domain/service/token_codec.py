"""Invite token codec.

Tokens are Fernet tokens (AES-128-CBC with an HMAC-SHA256 tag) over the JSON
form of :class:`InviteClaims`. Without the secret a token can neither be
read nor altered undetected.
"""

import base64
import hashlib

import logfire
from cryptography.fernet import Fernet, InvalidToken
from pydantic import ValidationError

from portal.domain.error import InvalidTokenError
from portal.domain.value import InviteClaims, InviteToken

from .base import Service


def derive_key(secret: str) -> bytes:
    """Derive a Fernet key from an arbitrary secret string.

    Fernet needs 32 url-safe base64 encoded bytes, so the secret is hashed
    with SHA-256 first.
    """
    digest = hashlib.sha256(secret.encode()).digest()
    return base64.urlsafe_b64encode(digest)


class InviteTokenCodec(Service):
    """Encodes invite claims into tokens and back.

    Decoding does not look at ``expires_at``; callers compare it to the
    current time themselves so expiry stays distinguishable from tampering.
    """

    def __init__(self, secret: str) -> None:
        """Initialize codec.

        Args:
            secret: Token secret from configuration
        """
        self._fernet = Fernet(derive_key(secret))

    def encode(self, claims: InviteClaims) -> InviteToken:
        """Encrypt claims into a URL-safe token."""
        payload = claims.model_dump_json().encode()
        return InviteToken(self._fernet.encrypt(payload).decode())

    def decode(self, token: InviteToken | str) -> InviteClaims:
        """Decrypt and parse a token.

        Args:
            token: Token from a signup link

        Returns:
            The embedded claims

        Raises:
            InvalidTokenError: If the token is malformed, tampered with or
                was issued under a different secret
        """
        raw = token.root if isinstance(token, InviteToken) else token
        try:
            payload = self._fernet.decrypt(raw.encode())
            return InviteClaims.model_validate_json(payload)
        except (InvalidToken, ValidationError, UnicodeError, ValueError) as e:
            logfire.warn(
                "Invite token rejected",
                error_type=type(e).__name__,
                token=raw[:8] + "...",
            )
            raise InvalidTokenError() from e
