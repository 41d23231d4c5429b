"""Invite repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from portal.domain.model.invite import Invite
from portal.domain.value import ActorId, InviteFilters, InviteId, InviteStatus


class InviteRepository(ABC):
    """Repository for Invite entity bound to a single transaction.

    Instances are handed out by :class:`TransactionManager`; every read and
    write happens inside the transaction that produced the repository.
    Row locks taken by the ``*_for_update`` methods are held until that
    transaction commits or rolls back.
    """

    @abstractmethod
    async def insert(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Args:
            invite: The invite to persist

        Returns:
            The stored invite
        """
        pass

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID without locking it.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_for_update(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID and lock its row.

        Concurrent callers for the same id block until the lock holder's
        transaction ends.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        invite_id: InviteId,
        new_status: InviteStatus,
        *,
        now: datetime,
        accepted_by: ActorId | None = None,
    ) -> Invite | None:
        """Transition a pending invite to a terminal status.

        The update is conditional on the stored status still being
        ``pending``; acceptance stamps ``accepted_at``/``accepted_by``.

        Args:
            invite_id: The invite to transition
            new_status: ``accepted`` or ``expired``
            now: Transition timestamp
            accepted_by: Accepting actor, required for ``accepted``

        Returns:
            The updated invite, or None when no pending row matched
        """
        pass

    @abstractmethod
    async def extend_expiry(
        self, invite_id: InviteId, expires_at: datetime, *, now: datetime
    ) -> Invite | None:
        """Move the expiry of a pending invite.

        Args:
            invite_id: The invite to extend
            expires_at: New expiry
            now: Update timestamp

        Returns:
            The updated invite, or None when no pending row matched
        """
        pass

    @abstractmethod
    async def find_pending_by_email_for_update(self, email: str) -> list[Invite]:
        """Lock and return every pending invite for an email, newest first.

        Args:
            email: Normalized email address

        Returns:
            Pending invites for the email
        """
        pass

    @abstractmethod
    async def find_expired_pending_for_update(self, now: datetime) -> list[Invite]:
        """Lock pending invites whose expiry is at or before ``now``.

        Rows already locked by another transaction are skipped, so two
        concurrent cleanups never wait on each other.

        Args:
            now: Reference time

        Returns:
            The locked batch
        """
        pass

    @abstractmethod
    async def list_by_email(self, email: str) -> list[Invite]:
        """List all invites for an email, newest first.

        Args:
            email: Normalized email address

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def list_all(
        self, filters: InviteFilters, page: int, limit: int
    ) -> tuple[list[Invite], int]:
        """List invites matching filters, newest first.

        Args:
            filters: Role, status and email filters
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (invites on the page, total matching invites)
        """
        pass


class TransactionManager(ABC):
    """Opens transactions over the invite store."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[InviteRepository]:
        """Start a transaction.

        Commits when the block exits normally and rolls back on any
        exception, including cancellation.

        Returns:
            Async context manager yielding a transaction-bound repository
        """
        pass
