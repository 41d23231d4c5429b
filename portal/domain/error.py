"""Domain layer errors.

Invite errors carry a closed :class:`InviteErrorKind` and a message that is
safe to show to the end user. The invite service raises them internally and
converts them to ``Err`` values at its public boundary.
"""

from enum import Enum


class DomainError(Exception):
    """Base domain error."""

    pass


class InviteErrorKind(str, Enum):
    """Every way an invite operation can fail."""

    INVALID_EMAIL_FORMAT = "INVALID_EMAIL_FORMAT"
    DOMAIN_NOT_ALLOWED = "DOMAIN_NOT_ALLOWED"
    RATE_LIMITED = "RATE_LIMITED"
    SPAM = "SPAM"
    INVALID_TOKEN = "INVALID_TOKEN"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"
    EXPIRED = "EXPIRED"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_USED = "ALREADY_USED"
    ALREADY_PROCESSED = "ALREADY_PROCESSED"
    EMAIL_MISMATCH = "EMAIL_MISMATCH"
    ROLE_MISMATCH = "ROLE_MISMATCH"
    NO_PENDING_INVITE = "NO_PENDING_INVITE"
    SEND_FAILED = "SEND_FAILED"
    STORE_ERROR = "STORE_ERROR"


class InviteError(DomainError):
    """Base invite error.

    Subclasses pin ``kind`` and a default user-facing message.
    """

    kind: InviteErrorKind = InviteErrorKind.STORE_ERROR
    default_message: str = "Invite operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidEmailFormatError(InviteError):
    kind = InviteErrorKind.INVALID_EMAIL_FORMAT
    default_message = "Invalid email format"


class DomainNotAllowedError(InviteError):
    kind = InviteErrorKind.DOMAIN_NOT_ALLOWED
    default_message = "Email domain is not allowed for this role"


class RateLimitError(InviteError):
    kind = InviteErrorKind.RATE_LIMITED
    default_message = "Too many requests, please try again later"


class SpamError(InviteError):
    kind = InviteErrorKind.SPAM
    default_message = "Too many invite attempts for this email"


class InvalidTokenError(InviteError):
    kind = InviteErrorKind.INVALID_TOKEN
    default_message = "Invalid invite token"


class ExpiredTokenError(InviteError):
    kind = InviteErrorKind.EXPIRED_TOKEN
    default_message = "Invite token has expired"


class InviteExpiredError(InviteError):
    kind = InviteErrorKind.EXPIRED
    default_message = "Invite has expired"


class InviteNotFoundError(InviteError):
    kind = InviteErrorKind.NOT_FOUND
    default_message = "Invite not found"


class InviteAlreadyUsedError(InviteError):
    kind = InviteErrorKind.ALREADY_USED
    default_message = "Invite has already been accepted"


class InviteAlreadyProcessedError(InviteError):
    kind = InviteErrorKind.ALREADY_PROCESSED
    default_message = "Invite has already been processed"


class EmailMismatchError(InviteError):
    kind = InviteErrorKind.EMAIL_MISMATCH
    default_message = "Email does not match the invite"


class RoleMismatchError(InviteError):
    kind = InviteErrorKind.ROLE_MISMATCH
    default_message = "Role does not match the invite"


class NoPendingInviteError(InviteError):
    kind = InviteErrorKind.NO_PENDING_INVITE
    default_message = "No pending invite found for this email"


class SendError(InviteError):
    kind = InviteErrorKind.SEND_FAILED
    default_message = "Failed to send invite email"


class StoreError(InviteError):
    kind = InviteErrorKind.STORE_ERROR
    default_message = "Invite service is temporarily unavailable, please retry"
