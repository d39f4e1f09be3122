"""Core DI providers (non-mockable)."""

import logfire
from dishka import Scope, provide

from fritter.config import Settings, StorageSettings
from fritter.util.di.base import ProviderBase
from fritter.util.observability import service_logger


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        """Provide storage settings."""
        return settings.storage

    @provide(scope=Scope.APP)
    def provide_logfire(self) -> logfire.Logfire:
        """Provide the Logfire instance used by domain services."""
        return service_logger()
