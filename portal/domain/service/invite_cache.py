"""Read-through cache for invites."""

import logfire
from pydantic import ValidationError

from portal.domain.model.invite import Invite
from portal.domain.repository import CacheStore
from portal.domain.value import InviteId

from .base import Service


class InviteCache(Service):
    """Caches invites by id.

    The cache is advisory. Failures are logged and treated as misses, and no
    state transition is ever decided from a cached copy.
    """

    def __init__(self, cache_store: CacheStore, ttl_seconds: int) -> None:
        """Initialize invite cache.

        Args:
            cache_store: Shared key-value store
            ttl_seconds: Lifetime of cached entries
        """
        self.cache_store = cache_store
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def key(invite_id: InviteId) -> str:
        return f"invite:{invite_id}"

    async def get(self, invite_id: InviteId) -> Invite | None:
        try:
            payload = await self.cache_store.get(self.key(invite_id))
        except Exception as e:
            logfire.warn("Invite cache read failed", invite_id=str(invite_id), error=str(e))
            return None

        if payload is None:
            return None

        try:
            return Invite.model_validate_json(payload)
        except ValidationError:
            logfire.warn("Discarding unreadable cache entry", invite_id=str(invite_id))
            await self.delete(invite_id)
            return None

    async def set(self, invite: Invite) -> None:
        try:
            await self.cache_store.set(
                self.key(invite.id), invite.model_dump_json(), self.ttl_seconds
            )
        except Exception as e:
            logfire.warn("Invite cache write failed", invite_id=str(invite.id), error=str(e))

    async def add(self, invite: Invite) -> None:
        """Fill the cache from a store read unless an entry already exists.

        Transitions overwrite the entry after commit, so a fill racing with
        one never replaces the newer record.
        """
        try:
            await self.cache_store.add(
                self.key(invite.id), invite.model_dump_json(), self.ttl_seconds
            )
        except Exception as e:
            logfire.warn("Invite cache fill failed", invite_id=str(invite.id), error=str(e))

    async def delete(self, invite_id: InviteId) -> None:
        try:
            await self.cache_store.delete(self.key(invite_id))
        except Exception as e:
            logfire.warn("Invite cache delete failed", invite_id=str(invite_id), error=str(e))
