"""Invite domain service.

Orchestrates the invite lifecycle: issuing invites behind the policy gates,
validating tokens, accepting, resending, cancelling and expiring invites.

Every public operation returns a :class:`~portal.domain.result.Result`.
Expected failures are raised internally as :class:`InviteError` subclasses
and converted to ``Err`` in one place (:meth:`InviteService._as_result`).
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import TypeVar

import logfire

from portal.config import InvitationSettings
from portal.domain.error import (
    EmailMismatchError,
    ExpiredTokenError,
    InvalidTokenError,
    InviteAlreadyProcessedError,
    InviteAlreadyUsedError,
    InviteError,
    InviteErrorKind,
    InviteExpiredError,
    InviteNotFoundError,
    NoPendingInviteError,
    RateLimitError,
    RoleMismatchError,
    SendError,
    SpamError,
    StoreError,
)
from portal.domain.model.invite import Invite, utc_now
from portal.domain.repository import InviteRepository, TransactionManager
from portal.domain.result import Err, Ok, Result
from portal.domain.value import (
    ActorId,
    InviteFilters,
    InviteId,
    InviteStatus,
    InviteToken,
    UserRole,
)
from portal.domain.value.common import ValueObject

from .audit_service import AuditAction, AuditEvent, AuditSink
from .base import Service
from .domain_policy import DomainPolicy
from .email_service import (
    INVITE_SUBJECTS,
    EmailSender,
    invite_template_data,
    invite_template_name,
)
from .invite_cache import InviteCache
from .rate_limiter import RateLimiter
from .spam_guard import SpamGuard
from .token_codec import InviteTokenCodec

T = TypeVar("T")

GENERIC_FAILURE_MESSAGE = "Invite operation failed"


class IssuedInvite(ValueObject):
    """A delivered invite together with the token sent to the invitee."""

    invite: Invite
    token: InviteToken
    signup_url: str


class ValidatedInvite(ValueObject):
    """Public claims of an invite whose token checked out."""

    invite_id: InviteId
    email: str
    role: UserRole
    expires_at: datetime


class BulkFailure(ValueObject):
    """One address a bulk request could not invite."""

    email: str
    kind: InviteErrorKind
    message: str


class BulkInviteReport(ValueObject):
    """Per-address outcome of a bulk request."""

    successful: list[IssuedInvite]
    failed: list[BulkFailure]


class InvitePage(ValueObject):
    """One page of invites."""

    invites: list[Invite]
    total: int
    page: int
    limit: int


class InviteService(Service):
    """Domain service for the invite lifecycle."""

    def __init__(
        self,
        transaction_manager: TransactionManager,
        token_codec: InviteTokenCodec,
        domain_policy: DomainPolicy,
        rate_limiter: RateLimiter,
        spam_guard: SpamGuard,
        invite_cache: InviteCache,
        email_sender: EmailSender,
        audit_sink: AuditSink,
        settings: InvitationSettings,
        frontend_url: str,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize invite service.

        Args:
            transaction_manager: Opens transactions over the invite store
            token_codec: Encodes and decodes invite tokens
            domain_policy: Email format and domain allow-list
            rate_limiter: IP, email and bulk rate limits
            spam_guard: Per-email attempt counter
            invite_cache: Read-through invite cache
            email_sender: Transactional email transport
            audit_sink: Audit trail
            settings: Invitation settings
            frontend_url: Base URL for signup links
            clock: Source of the current UTC time
        """
        self.transaction_manager = transaction_manager
        self.token_codec = token_codec
        self.domain_policy = domain_policy
        self.rate_limiter = rate_limiter
        self.spam_guard = spam_guard
        self.invite_cache = invite_cache
        self.email_sender = email_sender
        self.audit_sink = audit_sink
        self.settings = settings
        self.frontend_url = frontend_url.rstrip("/")
        self.clock = clock

    @property
    def invite_ttl(self) -> timedelta:
        return timedelta(days=self.settings.invite_ttl_days)

    # Issuing

    async def create_invite(
        self,
        email: str,
        role: UserRole,
        invited_by: ActorId,
        client_ip: str | None,
    ) -> Result[IssuedInvite]:
        """Create an invite and email the signup link.

        Gates run in order (format, IP and email rate limits, domain policy,
        spam guard) before the store is touched. The invite row is only
        committed once the email was handed to the provider.

        Args:
            email: Invitee address
            role: Role the invite grants
            invited_by: Issuing admin
            client_ip: Caller IP for rate limiting

        Returns:
            Ok with the issued invite, or Err with the failure kind
        """
        with logfire.span(
            "invite_service.create_invite", role=role.value, invited_by=invited_by
        ):
            return await self._as_result(
                self._create(email, role, invited_by, client_ip, check_ip=True),
                failure=AuditEvent(
                    action=AuditAction.FAILED,
                    actor=invited_by,
                    role=role.value,
                    email=email,
                    client_ip=client_ip,
                    detail="create",
                ),
            )

    async def create_bulk_invites(
        self,
        emails: list[str],
        role: UserRole,
        invited_by: ActorId,
        client_ip: str | None,
    ) -> Result[BulkInviteReport]:
        """Invite several addresses with the same role.

        The bulk rate limit applies to the request as a whole and replaces
        the per-IP limit; every address still passes its own gates.
        Failures are reported per address instead of failing the request.

        Args:
            emails: Invitee addresses
            role: Role the invites grant
            invited_by: Issuing admin
            client_ip: Caller IP, recorded in the audit trail

        Returns:
            Ok with the per-address report, or Err if the request itself
            was refused
        """
        with logfire.span(
            "invite_service.create_bulk_invites",
            role=role.value,
            invited_by=invited_by,
            count=len(emails),
        ):
            return await self._as_result(
                self._create_bulk(emails, role, invited_by, client_ip),
                failure=AuditEvent(
                    action=AuditAction.FAILED,
                    actor=invited_by,
                    role=role.value,
                    client_ip=client_ip,
                    detail="bulk_create",
                ),
            )

    async def resend_invite(
        self, email: str, invited_by: ActorId, client_ip: str | None
    ) -> Result[IssuedInvite]:
        """Reissue the newest pending invite for an address.

        Extends its expiry, supersedes every older pending invite for the
        same address and emails a fresh token.

        Args:
            email: Invitee address
            invited_by: Admin triggering the resend
            client_ip: Caller IP for rate limiting

        Returns:
            Ok with the reissued invite, or Err with the failure kind
        """
        with logfire.span("invite_service.resend_invite", invited_by=invited_by):
            return await self._as_result(
                self._resend(email, invited_by, client_ip),
                failure=AuditEvent(
                    action=AuditAction.FAILED,
                    actor=invited_by,
                    email=email,
                    client_ip=client_ip,
                    detail="resend",
                ),
            )

    # Signup

    async def validate_token(self, token: InviteToken | str) -> Result[ValidatedInvite]:
        """Check a token against the stored invite without changing it.

        Args:
            token: Token from a signup link

        Returns:
            Ok with the invite's public claims, or Err explaining why the
            token is unusable
        """
        with logfire.span("invite_service.validate_token"):
            return await self._as_result(self._validate(token))

    async def accept_invite(
        self,
        invite_id: InviteId,
        email: str,
        role: UserRole,
        accepted_by: ActorId,
        client_ip: str | None = None,
    ) -> Result[Invite]:
        """Accept an invite on behalf of a newly registered user.

        The invite row is locked for the whole check-and-update, so of two
        concurrent accepts exactly one wins and the other sees
        ``ALREADY_USED``.

        Args:
            invite_id: Invite being accepted
            email: Email the user registered with
            role: Role the user registered with
            accepted_by: The new user's id
            client_ip: Caller IP, recorded in the audit trail

        Returns:
            Ok with the accepted invite, or Err with the failure kind
        """
        with logfire.span(
            "invite_service.accept_invite",
            invite_id=str(invite_id),
            accepted_by=accepted_by,
        ):
            return await self._as_result(
                self._accept(invite_id, email, role, accepted_by, client_ip),
                failure=AuditEvent(
                    action=AuditAction.FAILED,
                    actor=accepted_by,
                    role=role.value,
                    invite_id=invite_id,
                    email=email,
                    client_ip=client_ip,
                    detail="accept",
                ),
            )

    # Administration

    async def cancel_invite(
        self,
        invite_id: InviteId,
        cancelled_by: ActorId,
        client_ip: str | None = None,
    ) -> Result[Invite]:
        """Expire a pending invite.

        Args:
            invite_id: Invite to cancel
            cancelled_by: Admin cancelling it
            client_ip: Caller IP, recorded in the audit trail

        Returns:
            Ok with the cancelled invite, or Err (NOT_FOUND, ALREADY_PROCESSED)
        """
        with logfire.span(
            "invite_service.cancel_invite",
            invite_id=str(invite_id),
            cancelled_by=cancelled_by,
        ):
            return await self._as_result(
                self._cancel(invite_id, cancelled_by, client_ip),
                failure=AuditEvent(
                    action=AuditAction.FAILED,
                    actor=cancelled_by,
                    invite_id=invite_id,
                    client_ip=client_ip,
                    detail="cancel",
                ),
            )

    async def cleanup_expired_invites(self) -> Result[list[InviteId]]:
        """Expire every pending invite past its expiry, in one transaction.

        Running it again with nothing newly expired is a no-op.

        Returns:
            Ok with the ids that were transitioned
        """
        with logfire.span("invite_service.cleanup_expired_invites"):
            return await self._as_result(
                self._cleanup(),
                failure=AuditEvent(action=AuditAction.FAILED, detail="cleanup"),
            )

    async def get_invite(self, invite_id: InviteId) -> Result[Invite]:
        """Read an invite through the cache."""
        with logfire.span("invite_service.get_invite", invite_id=str(invite_id)):
            return await self._as_result(self._get(invite_id))

    async def list_invites(
        self, filters: InviteFilters, page: int = 1, limit: int = 20
    ) -> Result[InvitePage]:
        """List invites matching filters, newest first."""
        with logfire.span("invite_service.list_invites", page=page, limit=limit):
            return await self._as_result(self._list(filters, page, limit))

    async def get_invite_history(self, email: str) -> Result[list[Invite]]:
        """All invites ever issued to an address, newest first."""
        with logfire.span("invite_service.get_invite_history"):
            return await self._as_result(self._history(email))

    async def check_email_domain(self, email: str, role: UserRole) -> Result[str]:
        """Check an address against the domain policy before inviting.

        Returns:
            Ok with the normalized address, or Err (INVALID_EMAIL_FORMAT,
            DOMAIN_NOT_ALLOWED)
        """
        with logfire.span("invite_service.check_email_domain", role=role.value):
            return await self._as_result(self._check_domain(email, role))

    # Internals

    async def _as_result(
        self, operation: Awaitable[T], failure: AuditEvent | None = None
    ) -> Result[T]:
        try:
            return Ok(await operation)
        except InviteError as e:
            logfire.info("Invite operation refused", kind=e.kind.value, reason=e.message)
            if failure is not None:
                await self._audit(failure.model_copy(update={"status": e.kind.value}))
            return Err.from_error(e)
        except Exception as e:
            logfire.exception("Invite operation failed", error=str(e))
            if failure is not None:
                await self._audit(
                    failure.model_copy(
                        update={"status": InviteErrorKind.STORE_ERROR.value}
                    )
                )
            return Err(kind=InviteErrorKind.STORE_ERROR, message=GENERIC_FAILURE_MESSAGE)

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[InviteRepository]:
        """Transaction bounded by the configured timeout."""
        timeout = self.settings.transaction_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                async with self.transaction_manager.transaction() as repo:
                    yield repo
        except TimeoutError as e:
            logfire.error("Invite transaction timed out", timeout_seconds=timeout)
            raise StoreError() from e

    async def _audit(self, event: AuditEvent) -> None:
        try:
            await self.audit_sink.record(event)
        except Exception as e:
            logfire.error(
                "Audit sink failed", action=event.action.value, error=str(e)
            )

    def _signup_url(self, token: InviteToken) -> str:
        return f"{self.frontend_url}/auth/signup?token={token.root}"

    def _issue(self, invite: Invite) -> IssuedInvite:
        token = self.token_codec.encode(invite.claims())
        return IssuedInvite(invite=invite, token=token, signup_url=self._signup_url(token))

    async def _deliver(self, issued: IssuedInvite) -> None:
        invite = issued.invite
        try:
            await self.email_sender.send(
                recipient=invite.email,
                subject=INVITE_SUBJECTS[invite.role],
                template_name=invite_template_name(invite.role),
                template_data=invite_template_data(
                    email=invite.email,
                    role=invite.role,
                    signup_url=issued.signup_url,
                    expires_at=invite.expires_at,
                ),
            )
        except Exception as e:
            logfire.error(
                "Invite email delivery failed",
                invite_id=str(invite.id),
                error=str(e),
            )
            raise SendError() from e

        logfire.info("Invite email sent", invite_id=str(invite.id), role=invite.role.value)

    def _ensure_pending(self, invite: Invite, now: datetime) -> None:
        """Raise the status-specific error for an invite that cannot be used."""
        if invite.status == InviteStatus.ACCEPTED:
            raise InviteAlreadyUsedError()
        if invite.status == InviteStatus.EXPIRED:
            raise InviteExpiredError()
        if invite.is_expired_at(now):
            raise InviteExpiredError()

    async def _create(
        self,
        email: str,
        role: UserRole,
        invited_by: ActorId,
        client_ip: str | None,
        check_ip: bool,
    ) -> IssuedInvite:
        normalized = self.domain_policy.normalize(email)

        self.domain_policy.domain_of(normalized)
        if check_ip and client_ip:
            await self.rate_limiter.check_ip_limit(client_ip)
        await self.rate_limiter.check_email_limit(normalized)
        self.domain_policy.validate(normalized, role)
        spam = await self.spam_guard.check_spam(normalized)
        if spam.is_spam:
            raise SpamError()

        invite = Invite.issue(
            email=normalized,
            role=role,
            invited_by=invited_by,
            ttl=self.invite_ttl,
            now=self.clock(),
        )

        async with self._transaction() as repo:
            saved = await repo.insert(invite)
            issued = self._issue(saved)
            await self._deliver(issued)

        await self.invite_cache.set(issued.invite)

        logfire.info(
            "Invite created",
            invite_id=str(saved.id),
            role=role.value,
            invited_by=invited_by,
        )
        await self._audit(
            AuditEvent(
                action=AuditAction.CREATED,
                actor=invited_by,
                role=role.value,
                invite_id=saved.id,
                email=normalized,
                client_ip=client_ip,
            )
        )
        return issued

    async def _create_bulk(
        self,
        emails: list[str],
        role: UserRole,
        invited_by: ActorId,
        client_ip: str | None,
    ) -> BulkInviteReport:
        if len(emails) > self.settings.max_bulk_invites:
            raise RateLimitError(
                f"At most {self.settings.max_bulk_invites} invites per bulk request"
            )

        await self.rate_limiter.check_bulk_limit(invited_by)

        successful: list[IssuedInvite] = []
        failed: list[BulkFailure] = []
        for email in emails:
            try:
                issued = await self._create(
                    email, role, invited_by, client_ip, check_ip=False
                )
            except InviteError as e:
                failed.append(BulkFailure(email=email, kind=e.kind, message=e.message))
                await self._audit(
                    AuditEvent(
                        action=AuditAction.FAILED,
                        actor=invited_by,
                        role=role.value,
                        email=email,
                        client_ip=client_ip,
                        status=e.kind.value,
                        detail="bulk_create",
                    )
                )
            except Exception as e:
                logfire.exception("Bulk invite failed", error=str(e))
                failed.append(
                    BulkFailure(
                        email=email,
                        kind=InviteErrorKind.STORE_ERROR,
                        message=GENERIC_FAILURE_MESSAGE,
                    )
                )
            else:
                successful.append(issued)

        logfire.info(
            "Bulk invites processed",
            successful=len(successful),
            failed=len(failed),
        )
        return BulkInviteReport(successful=successful, failed=failed)

    async def _lookup(self, invite_id: InviteId) -> Invite | None:
        cached = await self.invite_cache.get(invite_id)
        if cached is not None:
            return cached

        async with self._transaction() as repo:
            invite = await repo.find_by_id(invite_id)

        if invite is not None:
            await self.invite_cache.add(invite)
        return invite

    async def _validate(self, token: InviteToken | str) -> ValidatedInvite:
        claims = self.token_codec.decode(token)
        now = self.clock()

        if claims.expires_at <= now:
            raise ExpiredTokenError()

        invite = await self._lookup(claims.invite_id)
        if invite is None:
            raise InviteNotFoundError()

        self._ensure_pending(invite, now)

        if invite.email != claims.email or invite.role != claims.role:
            logfire.warn("Token claims do not match invite", invite_id=str(invite.id))
            raise InvalidTokenError()

        return ValidatedInvite(
            invite_id=invite.id,
            email=invite.email,
            role=invite.role,
            expires_at=invite.expires_at,
        )

    async def _accept(
        self,
        invite_id: InviteId,
        email: str,
        role: UserRole,
        accepted_by: ActorId,
        client_ip: str | None,
    ) -> Invite:
        normalized = self.domain_policy.normalize(email)

        async with self._transaction() as repo:
            invite = await repo.get_for_update(invite_id)
            if invite is None:
                raise InviteNotFoundError()

            now = self.clock()
            self._ensure_pending(invite, now)

            if invite.email != normalized:
                raise EmailMismatchError()
            if invite.role != role:
                raise RoleMismatchError()

            self.domain_policy.validate(invite.email, invite.role)
            spam = await self.spam_guard.is_flagged(invite.email)
            if spam.is_spam:
                raise SpamError()

            accepted = await repo.update_status(
                invite_id, InviteStatus.ACCEPTED, now=now, accepted_by=accepted_by
            )
            if accepted is None:
                raise InviteAlreadyUsedError()

        await self.invite_cache.set(accepted)

        logfire.info(
            "Invite accepted", invite_id=str(invite_id), accepted_by=accepted_by
        )
        await self._audit(
            AuditEvent(
                action=AuditAction.ACCEPTED,
                actor=accepted_by,
                role=accepted.role.value,
                invite_id=invite_id,
                email=accepted.email,
                client_ip=client_ip,
            )
        )
        return accepted

    async def _resend(
        self, email: str, invited_by: ActorId, client_ip: str | None
    ) -> IssuedInvite:
        normalized = self.domain_policy.normalize(email)

        self.domain_policy.domain_of(normalized)
        if client_ip:
            await self.rate_limiter.check_ip_limit(client_ip)
        await self.rate_limiter.check_email_limit(normalized)
        spam = await self.spam_guard.check_spam(normalized)
        if spam.is_spam:
            raise SpamError()

        superseded: list[Invite] = []
        async with self._transaction() as repo:
            pending = await repo.find_pending_by_email_for_update(normalized)
            if not pending:
                raise NoPendingInviteError()

            latest, older = pending[0], pending[1:]
            now = self.clock()

            for invite in older:
                expired = await repo.update_status(
                    invite.id, InviteStatus.EXPIRED, now=now
                )
                if expired is not None:
                    superseded.append(expired)

            extended = await repo.extend_expiry(
                latest.id, now + self.invite_ttl, now=now
            )
            if extended is None:
                raise NoPendingInviteError()

            issued = self._issue(extended)
            await self._deliver(issued)

        await self.invite_cache.set(issued.invite)
        for invite in superseded:
            await self.invite_cache.set(invite)

        logfire.info(
            "Invite resent",
            invite_id=str(extended.id),
            superseded=len(superseded),
        )
        await self._audit(
            AuditEvent(
                action=AuditAction.RESENT,
                actor=invited_by,
                role=extended.role.value,
                invite_id=extended.id,
                email=normalized,
                client_ip=client_ip,
            )
        )
        return issued

    async def _cancel(
        self, invite_id: InviteId, cancelled_by: ActorId, client_ip: str | None
    ) -> Invite:
        async with self._transaction() as repo:
            invite = await repo.get_for_update(invite_id)
            if invite is None:
                raise InviteNotFoundError()
            if not invite.is_pending:
                raise InviteAlreadyProcessedError(f"Invite is {invite.status.value}")

            cancelled = await repo.update_status(
                invite_id, InviteStatus.EXPIRED, now=self.clock()
            )
            if cancelled is None:
                raise InviteAlreadyProcessedError()

        await self.invite_cache.set(cancelled)

        logfire.info(
            "Invite cancelled", invite_id=str(invite_id), cancelled_by=cancelled_by
        )
        await self._audit(
            AuditEvent(
                action=AuditAction.CANCELLED,
                actor=cancelled_by,
                role=cancelled.role.value,
                invite_id=invite_id,
                email=cancelled.email,
                client_ip=client_ip,
            )
        )
        return cancelled

    async def _cleanup(self) -> list[InviteId]:
        swept: list[Invite] = []

        async with self._transaction() as repo:
            now = self.clock()
            batch = await repo.find_expired_pending_for_update(now)
            for invite in batch:
                expired = await repo.update_status(
                    invite.id, InviteStatus.EXPIRED, now=now
                )
                if expired is not None:
                    swept.append(expired)

        for invite in swept:
            await self.invite_cache.set(invite)
        expired_ids = [invite.id for invite in swept]

        logfire.info("Expired invites cleaned up", count=len(expired_ids))
        await self._audit(
            AuditEvent(
                action=AuditAction.CLEANUP,
                actor="system",
                detail=f"expired={len(expired_ids)}",
            )
        )
        return expired_ids

    async def _get(self, invite_id: InviteId) -> Invite:
        invite = await self._lookup(invite_id)
        if invite is None:
            raise InviteNotFoundError()
        return invite

    async def _list(self, filters: InviteFilters, page: int, limit: int) -> InvitePage:
        if filters.email is not None:
            filters = filters.model_copy(
                update={"email": self.domain_policy.normalize(filters.email)}
            )

        async with self._transaction() as repo:
            invites, total = await repo.list_all(filters, page, limit)

        return InvitePage(invites=invites, total=total, page=page, limit=limit)

    async def _history(self, email: str) -> list[Invite]:
        normalized = self.domain_policy.normalize(email)
        self.domain_policy.domain_of(normalized)

        async with self._transaction() as repo:
            return await repo.list_by_email(normalized)

    async def _check_domain(self, email: str, role: UserRole) -> str:
        normalized = self.domain_policy.normalize(email)
        self.domain_policy.validate(normalized, role)
        return normalized
