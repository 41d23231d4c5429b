"""Audit infrastructure providers."""

from dishka import Scope, provide

from portal.adapter.audit import LogfireAuditSink
from portal.domain.service import AuditSink
from portal.util.di.base import ProviderBase


class AuditProvider(ProviderBase):
    """Audit component base."""

    __mock_component__ = "audit"


class ProdAuditProvider(AuditProvider):
    """Production audit provider writing to Logfire."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_audit_sink(self) -> AuditSink:
        """Provide audit sink."""
        return LogfireAuditSink()
