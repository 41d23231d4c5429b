"""Audit sink that writes structured events to Logfire."""

import logfire

from portal.domain.service.audit_service import AuditEvent, AuditSink


class LogfireAuditSink(AuditSink):
    """Forwards audit events as structured Logfire logs."""

    async def record(self, event: AuditEvent) -> None:
        logfire.info(
            "audit {action}",
            action=event.action.value,
            actor=event.actor,
            role=event.role,
            invite_id=str(event.invite_id) if event.invite_id else None,
            email=event.email,
            client_ip=event.client_ip,
            status=event.status,
            detail=event.detail,
            occurred_at=event.occurred_at.isoformat(),
        )


class RecordingAuditSink(AuditSink):
    """Audit sink for testing that keeps events in memory."""

    def __init__(self) -> None:
        self.events: list[AuditEvent] = []
        self.fail = False

    async def record(self, event: AuditEvent) -> None:
        if self.fail:
            raise RuntimeError("audit sink unavailable")
        self.events.append(event)

    def actions(self) -> list[str]:
        return [e.action.value for e in self.events]
