"""Email infrastructure providers."""

from dishka import Scope, provide

from portal.adapter.email.client import HttpEmailSender
from portal.config import Settings
from portal.domain.service import EmailSender
from portal.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, settings: Settings) -> EmailSender:
        """Provide the HTTP transactional email sender."""
        return HttpEmailSender(
            api_url=settings.email.api_url,
            api_key=settings.email.api_key,
            from_address=settings.email.from_address,
            from_name=settings.email.from_name,
            timeout=settings.email.timeout_seconds,
        )
