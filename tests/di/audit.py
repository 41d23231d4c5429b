"""Mock audit providers for testing."""

from dishka import Scope, provide

from portal.adapter.audit import RecordingAuditSink
from portal.domain.service import AuditSink
from portal.util.di.infrastructure.audit import AuditProvider


class MockAuditProvider(AuditProvider):
    """Mock audit provider keeping events in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_audit_sink(self) -> AuditSink:
        """Provide recording audit sink."""
        return RecordingAuditSink()
