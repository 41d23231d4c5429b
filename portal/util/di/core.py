"""Core DI providers (non-mockable)."""

import logfire
from dishka import Scope, provide

from portal.config import AuthSettings, InvitationSettings, Settings
from portal.util.di.base import ProviderBase
from portal.util.error import ConfigurationError


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment.

        Raises:
            ConfigurationError: If a secret still holds its placeholder value
                outside test and development
        """
        settings = Settings()
        placeholders = settings.placeholder_secrets()
        if placeholders:
            logfire.error("Refusing placeholder secrets", settings=placeholders)
            raise ConfigurationError(placeholders, settings.environment)
        return settings

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        return settings.invitations
