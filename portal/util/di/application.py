"""Application layer DI providers."""

from dishka import Scope, provide

from portal.application.usecase.invite import (
    AcceptInviteUseCase,
    CancelInviteUseCase,
    CheckEmailDomainUseCase,
    CleanupExpiredInvitesUseCase,
    CreateBulkInvitesUseCase,
    CreateInviteUseCase,
    GetInviteHistoryUseCase,
    GetInvitesUseCase,
    GetInviteUseCase,
    ResendInviteUseCase,
    ValidateInviteUseCase,
)
from portal.domain.service import InviteService
from portal.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Issuing
    @provide
    def get_create_invite_use_case(
        self, invite_service: InviteService
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(invite_service=invite_service)

    @provide
    def get_create_bulk_invites_use_case(
        self, invite_service: InviteService
    ) -> CreateBulkInvitesUseCase:
        """Provide create bulk invites use case."""
        return CreateBulkInvitesUseCase(invite_service=invite_service)

    @provide
    def get_resend_invite_use_case(
        self, invite_service: InviteService
    ) -> ResendInviteUseCase:
        """Provide resend invite use case."""
        return ResendInviteUseCase(invite_service=invite_service)

    @provide
    def get_check_email_domain_use_case(
        self, invite_service: InviteService
    ) -> CheckEmailDomainUseCase:
        """Provide check email domain use case."""
        return CheckEmailDomainUseCase(invite_service=invite_service)

    # Redemption
    @provide
    def get_validate_invite_use_case(
        self, invite_service: InviteService
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(invite_service=invite_service)

    @provide
    def get_accept_invite_use_case(
        self, invite_service: InviteService
    ) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(invite_service=invite_service)

    # Administration
    @provide
    def get_cancel_invite_use_case(
        self, invite_service: InviteService
    ) -> CancelInviteUseCase:
        """Provide cancel invite use case."""
        return CancelInviteUseCase(invite_service=invite_service)

    @provide
    def get_get_invite_use_case(self, invite_service: InviteService) -> GetInviteUseCase:
        """Provide get invite use case."""
        return GetInviteUseCase(invite_service=invite_service)

    @provide
    def get_get_invites_use_case(
        self, invite_service: InviteService
    ) -> GetInvitesUseCase:
        """Provide get invites use case."""
        return GetInvitesUseCase(invite_service=invite_service)

    @provide
    def get_get_invite_history_use_case(
        self, invite_service: InviteService
    ) -> GetInviteHistoryUseCase:
        """Provide get invite history use case."""
        return GetInviteHistoryUseCase(invite_service=invite_service)

    @provide
    def get_cleanup_expired_invites_use_case(
        self, invite_service: InviteService
    ) -> CleanupExpiredInvitesUseCase:
        """Provide cleanup expired invites use case."""
        return CleanupExpiredInvitesUseCase(invite_service=invite_service)
