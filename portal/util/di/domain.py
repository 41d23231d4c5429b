"""Domain layer DI providers."""

from dishka import Scope, provide

from portal.config import AuthSettings, InvitationSettings, Settings
from portal.domain.repository import CacheStore, CounterStore, TransactionManager
from portal.domain.service import (
    AuditSink,
    DomainPolicy,
    EmailSender,
    InviteCache,
    InviteService,
    InviteTokenCodec,
    JWTService,
    RateLimiter,
    SpamGuard,
)
from portal.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Stateless policies and the token codec live for the whole app. The
    invite service is REQUEST-scoped; it opens its own transactions through
    the transaction manager.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_token_codec(self, settings: InvitationSettings) -> InviteTokenCodec:
        """Provide the invite token codec keyed from the token secret."""
        return InviteTokenCodec(secret=settings.token_secret)

    @provide(scope=Scope.APP)
    def get_domain_policy(self, settings: InvitationSettings) -> DomainPolicy:
        """Provide the email domain policy."""
        return DomainPolicy(allowed_domains=settings.allowed_domains)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_rate_limiter(
        self, counter_store: CounterStore, settings: InvitationSettings
    ) -> RateLimiter:
        """Provide rate limiter."""
        return RateLimiter(counter_store=counter_store, settings=settings)

    @provide
    def get_spam_guard(
        self, counter_store: CounterStore, settings: InvitationSettings
    ) -> SpamGuard:
        """Provide spam guard."""
        return SpamGuard(counter_store=counter_store, settings=settings)

    @provide
    def get_invite_cache(
        self, cache_store: CacheStore, settings: InvitationSettings
    ) -> InviteCache:
        """Provide invite cache."""
        return InviteCache(cache_store=cache_store, ttl_seconds=settings.cache_ttl_seconds)

    @provide
    def get_invite_service(
        self,
        transaction_manager: TransactionManager,
        token_codec: InviteTokenCodec,
        domain_policy: DomainPolicy,
        rate_limiter: RateLimiter,
        spam_guard: SpamGuard,
        invite_cache: InviteCache,
        email_sender: EmailSender,
        audit_sink: AuditSink,
        settings: Settings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            transaction_manager=transaction_manager,
            token_codec=token_codec,
            domain_policy=domain_policy,
            rate_limiter=rate_limiter,
            spam_guard=spam_guard,
            invite_cache=invite_cache,
            email_sender=email_sender,
            audit_sink=audit_sink,
            settings=settings.invitations,
            frontend_url=settings.api.frontend_url,
        )
