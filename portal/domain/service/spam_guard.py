"""Spam detection for repeated invites to the same address."""

import logfire

from portal.config import InvitationSettings
from portal.domain.repository import CounterStore
from portal.domain.value.common import ValueObject

from .base import Service


class SpamCheck(ValueObject):
    """Outcome of a spam check."""

    is_spam: bool
    attempts: int


class SpamGuard(Service):
    """Counts invite attempts per email over a rolling window.

    Attempts up to the threshold pass. Every later attempt inside the window
    is spam, and the counter keeps growing while saturated. Only issuance
    (create, bulk, resend) counts as an attempt; acceptance reads the count
    through ``is_flagged`` without adding to it.
    """

    def __init__(self, counter_store: CounterStore, settings: InvitationSettings) -> None:
        """Initialize spam guard.

        Args:
            counter_store: Shared counter store
            settings: Invitation settings with threshold and window
        """
        self.counter_store = counter_store
        self.threshold = settings.spam_threshold
        self.window_seconds = settings.spam_window_hours * 3600

    @staticmethod
    def key(email: str) -> str:
        return f"spam:invite:{email}"

    async def check_spam(self, email: str) -> SpamCheck:
        """Record an attempt for ``email`` and report whether it is spam."""
        try:
            attempts = await self.counter_store.hit(self.key(email), self.window_seconds)
        except Exception as e:
            logfire.error("Spam check failed, allowing request", error=str(e))
            return SpamCheck(is_spam=False, attempts=0)

        return self._evaluate(email, attempts)

    async def is_flagged(self, email: str) -> SpamCheck:
        """Report whether ``email`` is currently saturated, without recording."""
        try:
            attempts = await self.counter_store.count(self.key(email), self.window_seconds)
        except Exception as e:
            logfire.error("Spam check failed, allowing request", error=str(e))
            return SpamCheck(is_spam=False, attempts=0)

        return self._evaluate(email, attempts)

    def _evaluate(self, email: str, attempts: int) -> SpamCheck:
        is_spam = attempts > self.threshold
        if is_spam:
            logfire.warn("Spam detected", email=email, attempts=attempts)
        return SpamCheck(is_spam=is_spam, attempts=attempts)
