"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal.domain.model import Invite
from portal.domain.repository import InviteRepository
from portal.domain.value import ActorId, InviteFilters, InviteId, InviteStatus
from portal.persistence.mappers import invite_to_dict, row_to_invite
from portal.persistence.tables import invites_table

PENDING = InviteStatus.PENDING.value


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository.

    The session must already be inside a transaction; row locks use
    ``SELECT ... FOR UPDATE`` and are released when it ends.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, invite: Invite) -> Invite:
        stmt = insert(invites_table).values(**invite_to_dict(invite))
        await self.session.execute(stmt)
        return invite

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        return await self._one(stmt)

    async def get_for_update(self, invite_id: InviteId) -> Optional[Invite]:
        stmt = (
            select(invites_table)
            .where(invites_table.c.id == invite_id)
            .with_for_update()
        )
        return await self._one(stmt)

    async def update_status(
        self,
        invite_id: InviteId,
        new_status: InviteStatus,
        *,
        now: datetime,
        accepted_by: ActorId | None = None,
    ) -> Optional[Invite]:
        """Conditional status transition.

        Only rows still ``pending`` are touched, so a lost race shows up as
        zero updated rows instead of a blind overwrite.
        """
        values: dict[str, Any] = {"status": new_status.value, "updated_at": now}
        if new_status == InviteStatus.ACCEPTED:
            values["accepted_at"] = now
            values["accepted_by"] = accepted_by

        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.status == PENDING,
                )
            )
            .values(**values)
            .returning(*invites_table.c)
        )
        return await self._one(stmt)

    async def extend_expiry(
        self, invite_id: InviteId, expires_at: datetime, *, now: datetime
    ) -> Optional[Invite]:
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.status == PENDING,
                )
            )
            .values(expires_at=expires_at, updated_at=now)
            .returning(*invites_table.c)
        )
        return await self._one(stmt)

    async def find_pending_by_email_for_update(self, email: str) -> list[Invite]:
        stmt = (
            select(invites_table)
            .where(
                and_(
                    invites_table.c.email == email,
                    invites_table.c.status == PENDING,
                )
            )
            .order_by(invites_table.c.created_at.desc())
            .with_for_update()
        )
        return await self._all(stmt)

    async def find_expired_pending_for_update(self, now: datetime) -> list[Invite]:
        stmt = (
            select(invites_table)
            .where(
                and_(
                    invites_table.c.status == PENDING,
                    invites_table.c.expires_at <= now,
                )
            )
            .with_for_update(skip_locked=True)
        )
        return await self._all(stmt)

    async def list_by_email(self, email: str) -> list[Invite]:
        stmt = (
            select(invites_table)
            .where(invites_table.c.email == email)
            .order_by(invites_table.c.created_at.desc())
        )
        return await self._all(stmt)

    async def list_all(
        self, filters: InviteFilters, page: int, limit: int
    ) -> tuple[list[Invite], int]:
        """List invites with optional filters and 1-based pagination.

        Args:
            filters: Role, status and email filters
            page: Page number, starting at 1
            limit: Page size

        Returns:
            Tuple of (page of invites, total matching count)
        """
        conditions = []
        if filters.role:
            conditions.append(invites_table.c.role == filters.role.value)
        if filters.status:
            conditions.append(invites_table.c.status == filters.status.value)
        if filters.email:
            conditions.append(invites_table.c.email == filters.email)

        count_stmt = select(func.count()).select_from(invites_table)
        stmt = select(invites_table).order_by(invites_table.c.created_at.desc())
        if conditions:
            count_stmt = count_stmt.where(and_(*conditions))
            stmt = stmt.where(and_(*conditions))

        total = (await self.session.execute(count_stmt)).scalar() or 0

        stmt = stmt.limit(limit).offset((page - 1) * limit)
        return await self._all(stmt), total

    async def _one(self, stmt) -> Optional[Invite]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def _all(self, stmt) -> list[Invite]:
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]
