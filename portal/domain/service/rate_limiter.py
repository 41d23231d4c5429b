"""Request rate limiting for invite issuance."""

import logfire

from portal.config import InvitationSettings
from portal.domain.error import RateLimitError
from portal.domain.repository import CounterStore

from .base import Service


class RateLimiter(Service):
    """Sliding window rate limits per client IP, email and bulk actor.

    Every check records one hit. Exceeding a limit always fails closed; a
    counter store outage is logged and the request is let through.
    """

    def __init__(self, counter_store: CounterStore, settings: InvitationSettings) -> None:
        """Initialize rate limiter.

        Args:
            counter_store: Shared counter store
            settings: Invitation settings with limits and windows
        """
        self.counter_store = counter_store
        self.settings = settings

    async def check_ip_limit(self, ip: str) -> None:
        """Raises RateLimitError when ``ip`` exceeded its hourly budget."""
        await self._check(
            f"rate:ip:invite:{ip}",
            self.settings.ip_rate_limit,
            self.settings.ip_rate_window_seconds,
            scope="ip",
        )

    async def check_email_limit(self, email: str) -> None:
        """Raises RateLimitError when ``email`` exceeded its hourly budget."""
        await self._check(
            f"rate:email:invite:{email}",
            self.settings.email_rate_limit,
            self.settings.email_rate_window_seconds,
            scope="email",
        )

    async def check_bulk_limit(self, actor: str) -> None:
        """Raises RateLimitError when ``actor`` sent too many bulk requests."""
        await self._check(
            f"rate:bulk:invite:{actor}",
            self.settings.bulk_rate_limit,
            self.settings.bulk_rate_window_seconds,
            scope="bulk",
        )

    async def _check(self, key: str, limit: int, window_seconds: int, scope: str) -> None:
        try:
            hits = await self.counter_store.hit(key, window_seconds)
        except Exception as e:
            logfire.error(
                "Rate limit check failed, allowing request",
                key=key,
                error=str(e),
            )
            return

        if hits > limit:
            logfire.warn("Rate limit exceeded", key=key, hits=hits, limit=limit)
            raise RateLimitError(
                f"Too many {scope} invite requests, please try again later"
            )
