"""Unit tests for InviteService."""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from portal.config import InvitationSettings
from portal.domain.error import InviteErrorKind
from portal.domain.result import Err, Ok
from portal.domain.service import EmailSender
from portal.domain.value import (
    InviteClaims,
    InviteFilters,
    InviteId,
    InviteStatus,
    UserRole,
)

ADMIN = "admin-1"
IP = "203.0.113.7"


def unwrap(result):
    """Value of an Ok result, failing the test on Err."""
    assert isinstance(result, Ok), f"expected Ok, got {result}"
    return result.value


def error_kind(result) -> InviteErrorKind:
    """Kind of an Err result, failing the test on Ok."""
    assert isinstance(result, Err), f"expected Err, got {result}"
    return result.kind


async def create(harness, email="teacher@school.edu", role=UserRole.TEACHER, ip=IP):
    return await harness.service.create_invite(email, role, ADMIN, ip)


class SlowEmailSender(EmailSender):
    """Email sender that never finishes in time."""

    async def send(self, recipient, subject, template_name, template_data) -> None:
        await asyncio.sleep(5)


class TestCreateInvite:
    """Tests for create_invite."""

    @pytest.mark.asyncio
    async def test_create_invite_success(self, harness):
        """Creating an invite should store it pending and email the link."""
        # Act
        issued = unwrap(await create(harness, email="  Ms.Frizzle@School.EDU "))

        # Assert
        invite = issued.invite
        assert invite.email == "ms.frizzle@school.edu"
        assert invite.role == UserRole.TEACHER
        assert invite.status == InviteStatus.PENDING
        assert invite.invited_by == ADMIN
        assert invite.expires_at - invite.created_at == timedelta(days=7)
        assert issued.signup_url == (
            f"http://localhost:3000/auth/signup?token={issued.token.root}"
        )

        assert harness.store.invites[invite.id] == invite
        assert f"invite:{invite.id}" in harness.cache_store

        message = harness.email_sender.last_to("ms.frizzle@school.edu")
        assert message is not None
        assert message["template_name"] == "teacher_invite"
        assert message["template_data"]["signup_url"] == issued.signup_url

        assert harness.audit_sink.actions() == ["invite.created"]

    @pytest.mark.asyncio
    async def test_student_may_use_any_domain(self, harness):
        """Students are not restricted to the allowed domains."""
        issued = unwrap(await create(harness, email="kid@gmail.com", role=UserRole.STUDENT))

        assert issued.invite.role == UserRole.STUDENT

    @pytest.mark.asyncio
    async def test_teacher_with_foreign_domain_is_refused(self, harness):
        """Privileged roles must use an allowed domain."""
        # Act
        result = await create(harness, email="teacher@gmail.com")

        # Assert
        assert error_kind(result) == InviteErrorKind.DOMAIN_NOT_ALLOWED
        assert harness.store.invites == {}
        assert harness.email_sender.sent == []
        failure = harness.audit_sink.events[-1]
        assert failure.action.value == "invite.failed"
        assert failure.status == "DOMAIN_NOT_ALLOWED"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email", ["not-an-email", "a@@school.edu", "@school.edu", "a b@school.edu"]
    )
    async def test_malformed_email_is_refused(self, harness, email):
        """Malformed addresses never reach the store."""
        result = await create(harness, email=email, role=UserRole.STUDENT)

        assert error_kind(result) == InviteErrorKind.INVALID_EMAIL_FORMAT
        assert harness.store.invites == {}

    @pytest.mark.asyncio
    async def test_fourth_attempt_for_same_email_is_spam(self, harness):
        """More than three attempts per email in the window is spam."""
        # Arrange
        for _ in range(3):
            unwrap(await create(harness))

        # Act
        result = await create(harness)

        # Assert
        assert error_kind(result) == InviteErrorKind.SPAM
        assert len(harness.store.invites) == 3

    @pytest.mark.asyncio
    async def test_ip_rate_limit(self, harness):
        """The eleventh invite from one IP within the hour is refused."""
        # Arrange
        for i in range(10):
            unwrap(await create(harness, email=f"student{i}@example.com", role=UserRole.STUDENT))

        # Act
        result = await create(harness, email="student10@example.com", role=UserRole.STUDENT)

        # Assert
        assert error_kind(result) == InviteErrorKind.RATE_LIMITED
        assert len(harness.store.invites) == 10

    @pytest.mark.asyncio
    async def test_email_failure_rolls_back_the_invite(self, harness):
        """No invite row survives a failed email delivery."""
        # Arrange
        harness.email_sender.fail = True

        # Act
        result = await create(harness)

        # Assert
        assert error_kind(result) == InviteErrorKind.SEND_FAILED
        assert harness.store.invites == {}
        assert harness.store.rollbacks == 1
        assert harness.store.commits == 0

    @pytest.mark.asyncio
    async def test_transaction_timeout_is_store_error(self, make_harness):
        """A transaction that overruns its bound fails with a retryable error."""
        # Arrange
        harness = make_harness(
            InvitationSettings(token_secret="test-secret", transaction_timeout_seconds=0.05)
        )
        harness.service.email_sender = SlowEmailSender()

        # Act
        result = await create(harness)

        # Assert
        assert error_kind(result) == InviteErrorKind.STORE_ERROR
        assert "retry" in result.message
        assert harness.store.invites == {}

    @pytest.mark.asyncio
    async def test_audit_failure_does_not_fail_operation(self, harness):
        """The audit trail is best effort."""
        harness.audit_sink.fail = True

        issued = unwrap(await create(harness))

        assert issued.invite.id in harness.store.invites

    @pytest.mark.asyncio
    async def test_cache_outage_does_not_fail_operation(self, harness):
        """Invites are still created while the cache is down."""
        harness.cache_store.fail = True

        issued = unwrap(await create(harness))

        assert issued.invite.id in harness.store.invites

    @pytest.mark.asyncio
    async def test_counter_outage_fails_open(self, harness):
        """Rate limits and the spam guard allow requests when counters are down."""
        harness.counter_store.fail = True

        for _ in range(5):
            unwrap(await create(harness))

        assert len(harness.store.invites) == 5


class TestCreateBulkInvites:
    """Tests for create_bulk_invites."""

    @pytest.mark.asyncio
    async def test_reports_failures_per_address(self, harness):
        """One bad address does not fail the rest of the batch."""
        # Act
        report = unwrap(
            await harness.service.create_bulk_invites(
                ["a@school.edu", "broken", "b@gmail.com", "c@district.edu"],
                UserRole.TEACHER,
                ADMIN,
                IP,
            )
        )

        # Assert
        assert [i.invite.email for i in report.successful] == [
            "a@school.edu",
            "c@district.edu",
        ]
        assert {(f.email, f.kind) for f in report.failed} == {
            ("broken", InviteErrorKind.INVALID_EMAIL_FORMAT),
            ("b@gmail.com", InviteErrorKind.DOMAIN_NOT_ALLOWED),
        }
        assert len(harness.email_sender.sent) == 2

    @pytest.mark.asyncio
    async def test_bulk_is_not_subject_to_ip_limit(self, harness):
        """A batch larger than the per-IP limit goes through."""
        emails = [f"s{i}@example.com" for i in range(12)]

        report = unwrap(
            await harness.service.create_bulk_invites(emails, UserRole.STUDENT, ADMIN, IP)
        )

        assert len(report.successful) == 12
        assert report.failed == []

    @pytest.mark.asyncio
    async def test_oversized_batch_is_refused(self, harness):
        """Batches above the configured maximum are refused outright."""
        emails = [f"s{i}@example.com" for i in range(51)]

        result = await harness.service.create_bulk_invites(
            emails, UserRole.STUDENT, ADMIN, IP
        )

        assert error_kind(result) == InviteErrorKind.RATE_LIMITED
        assert harness.store.invites == {}

    @pytest.mark.asyncio
    async def test_bulk_rate_limit(self, harness):
        """The third bulk request within the hour is refused."""
        # Arrange
        for i in range(2):
            unwrap(
                await harness.service.create_bulk_invites(
                    [f"s{i}@example.com"], UserRole.STUDENT, ADMIN, IP
                )
            )

        # Act
        result = await harness.service.create_bulk_invites(
            ["late@example.com"], UserRole.STUDENT, ADMIN, IP
        )

        # Assert
        assert error_kind(result) == InviteErrorKind.RATE_LIMITED


class TestValidateToken:
    """Tests for validate_token."""

    @pytest.mark.asyncio
    async def test_valid_token(self, harness):
        """A fresh token resolves to the invite's public claims."""
        issued = unwrap(await create(harness))

        validated = unwrap(await harness.service.validate_token(issued.token))

        assert validated.invite_id == issued.invite.id
        assert validated.email == "teacher@school.edu"
        assert validated.role == UserRole.TEACHER
        assert validated.expires_at == issued.invite.expires_at

    @pytest.mark.asyncio
    async def test_validate_does_not_change_the_invite(self, harness):
        """Validation is read-only."""
        issued = unwrap(await create(harness))

        unwrap(await harness.service.validate_token(issued.token))
        unwrap(await harness.service.validate_token(issued.token))

        assert harness.store.invites[issued.invite.id].status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_validate_reads_store_on_cache_miss(self, harness):
        """A cold cache falls back to the store and warms the cache."""
        issued = unwrap(await create(harness))
        await harness.cache_store.delete(f"invite:{issued.invite.id}")

        unwrap(await harness.service.validate_token(issued.token))

        assert f"invite:{issued.invite.id}" in harness.cache_store

    @pytest.mark.asyncio
    async def test_tampered_token_is_invalid(self, harness):
        """Flipping a character breaks the authentication tag."""
        issued = unwrap(await create(harness))
        token = issued.token.root
        tampered = token[:-5] + ("A" if token[-5] != "A" else "B") + token[-4:]

        result = await harness.service.validate_token(tampered)

        assert error_kind(result) == InviteErrorKind.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_garbage_token_is_invalid(self, harness):
        result = await harness.service.validate_token("definitely-not-a-token")

        assert error_kind(result) == InviteErrorKind.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_token_for_unknown_invite(self, harness):
        """A well-formed token whose invite was never stored."""
        token = harness.codec.encode(
            InviteClaims(
                invite_id=InviteId(uuid4()),
                email="ghost@school.edu",
                role=UserRole.TEACHER,
                expires_at=harness.clock() + timedelta(days=1),
            )
        )

        result = await harness.service.validate_token(token)

        assert error_kind(result) == InviteErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_claims_must_match_the_invite(self, harness):
        """Claims are checked against the stored row."""
        issued = unwrap(await create(harness))
        forged = harness.codec.encode(
            issued.invite.claims().model_copy(update={"role": UserRole.ADMIN})
        )

        result = await harness.service.validate_token(forged)

        assert error_kind(result) == InviteErrorKind.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_expired_token(self, harness):
        """Tokens past their expiry are refused even if the row is pending."""
        issued = unwrap(await create(harness))
        harness.clock.advance(days=8)

        result = await harness.service.validate_token(issued.token)

        assert error_kind(result) == InviteErrorKind.EXPIRED_TOKEN

    @pytest.mark.asyncio
    async def test_used_token(self, harness):
        issued = unwrap(await create(harness))
        unwrap(
            await harness.service.accept_invite(
                issued.invite.id, "teacher@school.edu", UserRole.TEACHER, "user-1"
            )
        )

        result = await harness.service.validate_token(issued.token)

        assert error_kind(result) == InviteErrorKind.ALREADY_USED

    @pytest.mark.asyncio
    async def test_cancelled_invite_token(self, harness):
        issued = unwrap(await create(harness))
        unwrap(await harness.service.cancel_invite(issued.invite.id, ADMIN))

        result = await harness.service.validate_token(issued.token)

        assert error_kind(result) == InviteErrorKind.EXPIRED


class TestAcceptInvite:
    """Tests for accept_invite."""

    @pytest.mark.asyncio
    async def test_accept_success(self, harness):
        """Accepting marks the invite used and overwrites the cached copy."""
        # Arrange
        issued = unwrap(await create(harness))
        invite_id = issued.invite.id

        # Act
        accepted = unwrap(
            await harness.service.accept_invite(
                invite_id, "Teacher@School.edu", UserRole.TEACHER, "user-1", IP
            )
        )

        # Assert
        assert accepted.status == InviteStatus.ACCEPTED
        assert accepted.accepted_by == "user-1"
        assert accepted.accepted_at == harness.clock()
        assert harness.store.invites[invite_id].status == InviteStatus.ACCEPTED
        cached = await harness.service.invite_cache.get(invite_id)
        assert cached.status == InviteStatus.ACCEPTED
        assert harness.audit_sink.actions()[-1] == "invite.accepted"

    @pytest.mark.asyncio
    async def test_concurrent_accepts_have_one_winner(self, harness):
        """Two racing accepts: exactly one succeeds, the other sees ALREADY_USED."""
        # Arrange
        issued = unwrap(await create(harness))
        invite_id = issued.invite.id

        # Act
        results = await asyncio.gather(
            harness.service.accept_invite(
                invite_id, "teacher@school.edu", UserRole.TEACHER, "user-1"
            ),
            harness.service.accept_invite(
                invite_id, "teacher@school.edu", UserRole.TEACHER, "user-2"
            ),
        )

        # Assert
        winners = [r for r in results if isinstance(r, Ok)]
        losers = [r for r in results if isinstance(r, Err)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert losers[0].kind == InviteErrorKind.ALREADY_USED
        stored = harness.store.invites[invite_id]
        assert stored.accepted_by == winners[0].value.accepted_by

    @pytest.mark.asyncio
    async def test_accept_is_not_a_spam_attempt(self, harness):
        """Acceptance checks the spam counter without adding to it."""
        issued = unwrap(await create(harness))
        unwrap(
            await harness.service.accept_invite(
                issued.invite.id, "teacher@school.edu", UserRole.TEACHER, "user-1"
            )
        )

        unwrap(await create(harness))
        third = await create(harness)

        assert isinstance(third, Ok)

    @pytest.mark.asyncio
    async def test_cache_fill_racing_accept_keeps_accepted_copy(self, harness):
        """A validation that read the row before an accept cannot re-cache it as pending."""
        # Arrange
        issued = unwrap(await create(harness))
        invite_id = issued.invite.id
        await harness.cache_store.delete(f"invite:{invite_id}")

        cache = harness.service.invite_cache
        fill = cache.add

        async def accept_then_fill(invite):
            unwrap(
                await harness.service.accept_invite(
                    invite_id, "teacher@school.edu", UserRole.TEACHER, "user-1"
                )
            )
            await fill(invite)

        cache.add = accept_then_fill

        # Act
        first = await harness.service.validate_token(issued.token)
        cache.add = fill
        second = await harness.service.validate_token(issued.token)

        # Assert
        assert isinstance(first, Ok)
        assert harness.store.invites[invite_id].status == InviteStatus.ACCEPTED
        assert (await cache.get(invite_id)).status == InviteStatus.ACCEPTED
        assert error_kind(second) == InviteErrorKind.ALREADY_USED

    @pytest.mark.asyncio
    async def test_email_mismatch(self, harness):
        issued = unwrap(await create(harness))

        result = await harness.service.accept_invite(
            issued.invite.id, "other@school.edu", UserRole.TEACHER, "user-1"
        )

        assert error_kind(result) == InviteErrorKind.EMAIL_MISMATCH
        assert harness.store.invites[issued.invite.id].status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_role_mismatch(self, harness):
        issued = unwrap(await create(harness))

        result = await harness.service.accept_invite(
            issued.invite.id, "teacher@school.edu", UserRole.ADMIN, "user-1"
        )

        assert error_kind(result) == InviteErrorKind.ROLE_MISMATCH

    @pytest.mark.asyncio
    async def test_expiry_wins_over_pending_status(self, harness):
        """A pending row past its expiry cannot be accepted before cleanup runs."""
        issued = unwrap(await create(harness))
        harness.clock.advance(days=7)

        result = await harness.service.accept_invite(
            issued.invite.id, "teacher@school.edu", UserRole.TEACHER, "user-1"
        )

        assert error_kind(result) == InviteErrorKind.EXPIRED
        assert harness.store.invites[issued.invite.id].status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_unknown_invite(self, harness):
        result = await harness.service.accept_invite(
            InviteId(uuid4()), "teacher@school.edu", UserRole.TEACHER, "user-1"
        )

        assert error_kind(result) == InviteErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_flagged_email_cannot_accept(self, harness):
        """An address saturated by invite attempts cannot redeem invites."""
        # Arrange
        issued = unwrap(await create(harness))
        for _ in range(3):
            await create(harness)

        # Act
        result = await harness.service.accept_invite(
            issued.invite.id, "teacher@school.edu", UserRole.TEACHER, "user-1"
        )

        # Assert
        assert error_kind(result) == InviteErrorKind.SPAM


class TestResendInvite:
    """Tests for resend_invite."""

    @pytest.mark.asyncio
    async def test_resend_extends_expiry_and_sends_new_link(self, harness):
        # Arrange
        issued = unwrap(await create(harness))
        harness.clock.advance(days=3)

        # Act
        resent = unwrap(
            await harness.service.resend_invite("teacher@school.edu", ADMIN, IP)
        )

        # Assert
        assert resent.invite.id == issued.invite.id
        assert resent.invite.expires_at == harness.clock() + timedelta(days=7)
        assert resent.token != issued.token
        assert len(harness.email_sender.sent) == 2
        assert harness.audit_sink.actions()[-1] == "invite.resent"

        validated = unwrap(await harness.service.validate_token(resent.token))
        assert validated.expires_at == resent.invite.expires_at

    @pytest.mark.asyncio
    async def test_resend_supersedes_older_pending_invites(self, harness):
        """Only the newest pending invite survives a resend."""
        # Arrange
        older = unwrap(await create(harness))
        harness.clock.advance(hours=1)
        newer = unwrap(await create(harness))

        # Act
        resent = unwrap(
            await harness.service.resend_invite("teacher@school.edu", ADMIN, IP)
        )

        # Assert
        assert resent.invite.id == newer.invite.id
        assert harness.store.invites[older.invite.id].status == InviteStatus.EXPIRED
        assert harness.store.invites[newer.invite.id].status == InviteStatus.PENDING
        cached = await harness.service.invite_cache.get(older.invite.id)
        assert cached.status == InviteStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_resend_without_pending_invite(self, harness):
        result = await harness.service.resend_invite("nobody@school.edu", ADMIN, IP)

        assert error_kind(result) == InviteErrorKind.NO_PENDING_INVITE

    @pytest.mark.asyncio
    async def test_resend_after_acceptance(self, harness):
        issued = unwrap(await create(harness))
        unwrap(
            await harness.service.accept_invite(
                issued.invite.id, "teacher@school.edu", UserRole.TEACHER, "user-1"
            )
        )

        result = await harness.service.resend_invite("teacher@school.edu", ADMIN, IP)

        assert error_kind(result) == InviteErrorKind.NO_PENDING_INVITE

    @pytest.mark.asyncio
    async def test_resend_email_failure_keeps_old_expiry(self, harness):
        """A failed resend leaves the invite exactly as it was."""
        issued = unwrap(await create(harness))
        harness.clock.advance(days=3)
        harness.email_sender.fail = True

        result = await harness.service.resend_invite("teacher@school.edu", ADMIN, IP)

        assert error_kind(result) == InviteErrorKind.SEND_FAILED
        stored = harness.store.invites[issued.invite.id]
        assert stored.expires_at == issued.invite.expires_at


class TestCancelInvite:
    """Tests for cancel_invite."""

    @pytest.mark.asyncio
    async def test_cancel_pending_invite(self, harness):
        issued = unwrap(await create(harness))

        cancelled = unwrap(await harness.service.cancel_invite(issued.invite.id, ADMIN))

        assert cancelled.status == InviteStatus.EXPIRED
        cached = await harness.service.invite_cache.get(issued.invite.id)
        assert cached.status == InviteStatus.EXPIRED
        assert harness.audit_sink.actions()[-1] == "invite.cancelled"

    @pytest.mark.asyncio
    async def test_cancel_twice(self, harness):
        issued = unwrap(await create(harness))
        unwrap(await harness.service.cancel_invite(issued.invite.id, ADMIN))

        result = await harness.service.cancel_invite(issued.invite.id, ADMIN)

        assert error_kind(result) == InviteErrorKind.ALREADY_PROCESSED

    @pytest.mark.asyncio
    async def test_cancel_accepted_invite(self, harness):
        """Accepted invites are terminal."""
        issued = unwrap(await create(harness))
        unwrap(
            await harness.service.accept_invite(
                issued.invite.id, "teacher@school.edu", UserRole.TEACHER, "user-1"
            )
        )

        result = await harness.service.cancel_invite(issued.invite.id, ADMIN)

        assert error_kind(result) == InviteErrorKind.ALREADY_PROCESSED
        assert harness.store.invites[issued.invite.id].status == InviteStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_cancel_unknown_invite(self, harness):
        result = await harness.service.cancel_invite(InviteId(uuid4()), ADMIN)

        assert error_kind(result) == InviteErrorKind.NOT_FOUND


class TestCleanupExpiredInvites:
    """Tests for cleanup_expired_invites."""

    @pytest.mark.asyncio
    async def test_expires_only_overdue_pending_invites(self, harness):
        # Arrange
        overdue = unwrap(await create(harness, email="old@school.edu"))
        accepted = unwrap(await create(harness, email="done@school.edu"))
        unwrap(
            await harness.service.accept_invite(
                accepted.invite.id, "done@school.edu", UserRole.TEACHER, "user-1"
            )
        )
        harness.clock.advance(days=5)
        fresh = unwrap(await create(harness, email="new@school.edu"))
        harness.clock.advance(days=3)

        # Act
        expired_ids = unwrap(await harness.service.cleanup_expired_invites())

        # Assert
        assert expired_ids == [overdue.invite.id]
        assert harness.store.invites[overdue.invite.id].status == InviteStatus.EXPIRED
        assert harness.store.invites[fresh.invite.id].status == InviteStatus.PENDING
        assert harness.store.invites[accepted.invite.id].status == InviteStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_sweeps_invite_at_its_expiry_instant(self, harness):
        """An invite refused as expired is also swept at the same instant."""
        # Arrange
        issued = unwrap(await create(harness))
        harness.clock.advance(days=7)
        assert harness.clock() == issued.invite.expires_at
        refused = await harness.service.accept_invite(
            issued.invite.id, "teacher@school.edu", UserRole.TEACHER, "user-1"
        )

        # Act
        expired_ids = unwrap(await harness.service.cleanup_expired_invites())

        # Assert
        assert error_kind(refused) == InviteErrorKind.EXPIRED
        assert expired_ids == [issued.invite.id]
        cached = await harness.service.invite_cache.get(issued.invite.id)
        assert cached.status == InviteStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_cleanup_is_idempotent(self, harness):
        unwrap(await create(harness))
        harness.clock.advance(days=8)

        first = unwrap(await harness.service.cleanup_expired_invites())
        second = unwrap(await harness.service.cleanup_expired_invites())

        assert len(first) == 1
        assert second == []
        assert harness.audit_sink.actions()[-2:] == ["invite.cleanup", "invite.cleanup"]


class TestQueries:
    """Tests for the read-only operations."""

    @pytest.mark.asyncio
    async def test_get_invite(self, harness):
        issued = unwrap(await create(harness))

        invite = unwrap(await harness.service.get_invite(issued.invite.id))

        assert invite == issued.invite

    @pytest.mark.asyncio
    async def test_get_unknown_invite(self, harness):
        result = await harness.service.get_invite(InviteId(uuid4()))

        assert error_kind(result) == InviteErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_list_invites_filters_and_pages(self, harness):
        # Arrange
        for i in range(3):
            unwrap(await create(harness, email=f"t{i}@school.edu"))
            harness.clock.advance(minutes=1)
        unwrap(await create(harness, email="kid@example.com", role=UserRole.STUDENT))

        # Act
        teachers = unwrap(
            await harness.service.list_invites(
                InviteFilters(role=UserRole.TEACHER), page=1, limit=2
            )
        )
        second_page = unwrap(
            await harness.service.list_invites(
                InviteFilters(role=UserRole.TEACHER), page=2, limit=2
            )
        )

        # Assert
        assert teachers.total == 3
        assert [i.email for i in teachers.invites] == ["t2@school.edu", "t1@school.edu"]
        assert [i.email for i in second_page.invites] == ["t0@school.edu"]

    @pytest.mark.asyncio
    async def test_list_invites_by_status(self, harness):
        issued = unwrap(await create(harness))
        unwrap(await create(harness, email="other@school.edu"))
        unwrap(await harness.service.cancel_invite(issued.invite.id, ADMIN))

        page = unwrap(
            await harness.service.list_invites(InviteFilters(status=InviteStatus.EXPIRED))
        )

        assert [i.id for i in page.invites] == [issued.invite.id]

    @pytest.mark.asyncio
    async def test_history_is_normalized_and_newest_first(self, harness):
        first = unwrap(await create(harness))
        harness.clock.advance(hours=1)
        second = unwrap(await create(harness))

        history = unwrap(await harness.service.get_invite_history(" TEACHER@school.edu"))

        assert [i.id for i in history] == [second.invite.id, first.invite.id]

    @pytest.mark.asyncio
    async def test_check_email_domain(self, harness):
        assert unwrap(
            await harness.service.check_email_domain("Head@District.edu", UserRole.ADMIN)
        ) == "head@district.edu"

        result = await harness.service.check_email_domain("head@gmail.com", UserRole.ADMIN)
        assert error_kind(result) == InviteErrorKind.DOMAIN_NOT_ALLOWED
