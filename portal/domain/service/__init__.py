"""Domain services."""

from .audit_service import AuditAction, AuditEvent, AuditSink
from .base import Service
from .domain_policy import DomainPolicy
from .email_service import EmailSender
from .invite_cache import InviteCache
from .invite_service import (
    BulkFailure,
    BulkInviteReport,
    InvitePage,
    InviteService,
    IssuedInvite,
    ValidatedInvite,
)
from .jwt_service import JWTService
from .rate_limiter import RateLimiter
from .spam_guard import SpamCheck, SpamGuard
from .token_codec import InviteTokenCodec

__all__ = [
    "AuditAction",
    "AuditEvent",
    "AuditSink",
    "BulkFailure",
    "BulkInviteReport",
    "DomainPolicy",
    "EmailSender",
    "InviteCache",
    "InvitePage",
    "InviteService",
    "InviteTokenCodec",
    "IssuedInvite",
    "JWTService",
    "RateLimiter",
    "Service",
    "SpamCheck",
    "SpamGuard",
    "ValidatedInvite",
]
