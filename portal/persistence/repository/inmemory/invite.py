"""In-memory invite store for testing.

Reproduces the transactional behaviour of the Postgres store: writes are
staged per transaction and only become visible on commit, and row locks
are one ``asyncio.Lock`` per invite id held until commit or rollback.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from portal.domain.model.invite import Invite
from portal.domain.repository.invite import InviteRepository, TransactionManager
from portal.domain.value import ActorId, InviteFilters, InviteId, InviteStatus


class InMemoryInviteStore:
    """Committed invites shared by all in-memory transactions."""

    def __init__(self) -> None:
        self.invites: dict[InviteId, Invite] = {}
        self._locks: dict[InviteId, asyncio.Lock] = {}
        self.commits = 0
        self.rollbacks = 0

    def lock_for(self, invite_id: InviteId) -> asyncio.Lock:
        return self._locks.setdefault(invite_id, asyncio.Lock())


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository bound to one transaction."""

    def __init__(self, store: InMemoryInviteStore) -> None:
        self._store = store
        self._staged: dict[InviteId, Invite] = {}
        self._held: dict[InviteId, asyncio.Lock] = {}

    async def insert(self, invite: Invite) -> Invite:
        """Insert an invite."""
        if invite.id in self._view():
            raise ValueError(f"Duplicate invite id {invite.id}")
        await self._lock(invite.id)
        self._staged[invite.id] = invite
        return invite

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        return self._view().get(invite_id)

    async def get_for_update(self, invite_id: InviteId) -> Optional[Invite]:
        """Lock and return an invite."""
        if invite_id not in self._view():
            return None
        await self._lock(invite_id)
        return self._view().get(invite_id)

    async def update_status(
        self,
        invite_id: InviteId,
        new_status: InviteStatus,
        *,
        now: datetime,
        accepted_by: ActorId | None = None,
    ) -> Optional[Invite]:
        """Transition a pending invite."""
        updates: dict[str, Any] = {"status": new_status, "updated_at": now}
        if new_status == InviteStatus.ACCEPTED:
            updates["accepted_at"] = now
            updates["accepted_by"] = accepted_by
        return await self._update_pending(invite_id, updates)

    async def extend_expiry(
        self, invite_id: InviteId, expires_at: datetime, *, now: datetime
    ) -> Optional[Invite]:
        """Move the expiry of a pending invite."""
        return await self._update_pending(
            invite_id, {"expires_at": expires_at, "updated_at": now}
        )

    async def find_pending_by_email_for_update(self, email: str) -> list[Invite]:
        """Lock and return pending invites for an email, newest first."""
        candidates = [
            i for i in self._view().values() if i.email == email and i.is_pending
        ]
        for invite in candidates:
            await self._lock(invite.id)
        # Re-read after locking, another transaction may have committed
        view = self._view()
        locked = [view[i.id] for i in candidates if view[i.id].is_pending]
        return self._newest_first(locked)

    async def find_expired_pending_for_update(self, now: datetime) -> list[Invite]:
        """Lock expired pending invites, skipping rows locked elsewhere."""
        batch = []
        for invite in list(self._view().values()):
            if not invite.is_pending or not invite.is_expired_at(now):
                continue
            lock = self._store.lock_for(invite.id)
            if invite.id not in self._held and lock.locked():
                continue
            await self._lock(invite.id)
            current = self._view()[invite.id]
            if current.is_pending and current.is_expired_at(now):
                batch.append(current)
        return batch

    async def list_by_email(self, email: str) -> list[Invite]:
        """List invites for an email, newest first."""
        return self._newest_first(i for i in self._view().values() if i.email == email)

    async def list_all(
        self, filters: InviteFilters, page: int, limit: int
    ) -> tuple[list[Invite], int]:
        """List invites with filters and 1-based pagination."""
        matching = [
            i
            for i in self._view().values()
            if (filters.role is None or i.role == filters.role)
            and (filters.status is None or i.status == filters.status)
            and (filters.email is None or i.email == filters.email)
        ]
        ordered = self._newest_first(matching)
        offset = (page - 1) * limit
        return ordered[offset : offset + limit], len(ordered)

    def commit(self) -> None:
        self._store.invites.update(self._staged)
        self._store.commits += 1
        self._release()

    def rollback(self) -> None:
        self._staged.clear()
        self._store.rollbacks += 1
        self._release()

    async def _lock(self, invite_id: InviteId) -> None:
        if invite_id in self._held:
            return
        lock = self._store.lock_for(invite_id)
        await lock.acquire()
        self._held[invite_id] = lock
        # Let other transactions run so contention actually interleaves
        await asyncio.sleep(0)

    async def _update_pending(
        self, invite_id: InviteId, updates: dict[str, Any]
    ) -> Optional[Invite]:
        if invite_id not in self._view():
            return None
        await self._lock(invite_id)
        current = self._view()[invite_id]
        if not current.is_pending:
            return None
        updated = Invite.model_validate({**current.model_dump(), **updates})
        self._staged[invite_id] = updated
        return updated

    def _view(self) -> dict[InviteId, Invite]:
        return {**self._store.invites, **self._staged}

    def _release(self) -> None:
        for lock in self._held.values():
            lock.release()
        self._held.clear()

    @staticmethod
    def _newest_first(invites) -> list[Invite]:
        return sorted(invites, key=lambda i: i.created_at, reverse=True)


class InMemoryTransactionManager(TransactionManager):
    """Transaction manager over an :class:`InMemoryInviteStore`."""

    def __init__(self, store: InMemoryInviteStore) -> None:
        self.store = store

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[InviteRepository]:
        repo = InMemoryInviteRepository(self.store)
        try:
            yield repo
        except BaseException:
            repo.rollback()
            raise
        repo.commit()
