"""Invite use cases."""

from portal.application.usecase.invite.accept_invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
)
from portal.application.usecase.invite.cancel_invite import (
    CancelInviteRequest,
    CancelInviteUseCase,
)
from portal.application.usecase.invite.check_email_domain import (
    CheckEmailDomainRequest,
    CheckEmailDomainResponse,
    CheckEmailDomainUseCase,
)
from portal.application.usecase.invite.cleanup_expired_invites import (
    CleanupExpiredInvitesResponse,
    CleanupExpiredInvitesUseCase,
)
from portal.application.usecase.invite.common import InviteItem
from portal.application.usecase.invite.create_bulk_invites import (
    CreateBulkInvitesRequest,
    CreateBulkInvitesResponse,
    CreateBulkInvitesUseCase,
    FailedInviteItem,
)
from portal.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from portal.application.usecase.invite.get_invite import (
    GetInviteRequest,
    GetInviteUseCase,
)
from portal.application.usecase.invite.get_invite_history import (
    GetInviteHistoryRequest,
    GetInviteHistoryResponse,
    GetInviteHistoryUseCase,
)
from portal.application.usecase.invite.get_invites import (
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
)
from portal.application.usecase.invite.resend_invite import (
    ResendInviteRequest,
    ResendInviteResponse,
    ResendInviteUseCase,
)
from portal.application.usecase.invite.validate_invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "AcceptInviteRequest",
    "AcceptInviteResponse",
    "AcceptInviteUseCase",
    "CancelInviteRequest",
    "CancelInviteUseCase",
    "CheckEmailDomainRequest",
    "CheckEmailDomainResponse",
    "CheckEmailDomainUseCase",
    "CleanupExpiredInvitesResponse",
    "CleanupExpiredInvitesUseCase",
    "CreateBulkInvitesRequest",
    "CreateBulkInvitesResponse",
    "CreateBulkInvitesUseCase",
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "FailedInviteItem",
    "GetInviteHistoryRequest",
    "GetInviteHistoryResponse",
    "GetInviteHistoryUseCase",
    "GetInviteRequest",
    "GetInviteUseCase",
    "GetInvitesRequest",
    "GetInvitesResponse",
    "GetInvitesUseCase",
    "InviteItem",
    "ResendInviteRequest",
    "ResendInviteResponse",
    "ResendInviteUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
]
