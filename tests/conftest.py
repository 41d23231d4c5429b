"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import logfire
import pytest

from portal.adapter.audit import RecordingAuditSink
from portal.adapter.email.client import MockEmailSender
from portal.config import InvitationSettings
from portal.domain.service import (
    DomainPolicy,
    InviteCache,
    InviteService,
    InviteTokenCodec,
    RateLimiter,
    SpamGuard,
)
from portal.persistence.repository.inmemory import (
    InMemoryCacheStore,
    InMemoryCounterStore,
    InMemoryInviteStore,
    InMemoryTransactionManager,
)

FRONTEND_URL = "http://localhost:3000"
ADMIN_ID = "admin-1"

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class ServiceHarness:
    """Invite service wired to in-memory collaborators, with handles on each."""

    def __init__(self, settings: InvitationSettings | None = None) -> None:
        self.settings = settings or InvitationSettings(token_secret="test-secret")
        self.clock = FakeClock()
        self.store = InMemoryInviteStore()
        self.cache_store = InMemoryCacheStore()
        self.counter_store = InMemoryCounterStore()
        self.email_sender = MockEmailSender()
        self.audit_sink = RecordingAuditSink()
        self.codec = InviteTokenCodec(self.settings.token_secret)
        self.service = InviteService(
            transaction_manager=InMemoryTransactionManager(self.store),
            token_codec=self.codec,
            domain_policy=DomainPolicy(self.settings.allowed_domains),
            rate_limiter=RateLimiter(self.counter_store, self.settings),
            spam_guard=SpamGuard(self.counter_store, self.settings),
            invite_cache=InviteCache(self.cache_store, self.settings.cache_ttl_seconds),
            email_sender=self.email_sender,
            audit_sink=self.audit_sink,
            settings=self.settings,
            frontend_url=FRONTEND_URL,
            clock=self.clock,
        )


@pytest.fixture
def harness() -> ServiceHarness:
    """Fresh invite service with in-memory collaborators."""
    return ServiceHarness()


@pytest.fixture
def make_harness():
    """Factory for harnesses with custom invitation settings."""
    return ServiceHarness
