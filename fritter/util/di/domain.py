"""Domain layer DI providers."""

import logfire
from dishka import Scope, provide

from fritter.config import StorageSettings
from fritter.domain.repository import FreetRepository, UserRepository
from fritter.domain.service import FeedService, FreetService
from fritter.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_freet_service(
        self,
        freet_repository: FreetRepository,
        user_repository: UserRepository,
        storage_settings: StorageSettings,
        log: logfire.Logfire,
    ) -> FreetService:
        """Provide freet domain service."""
        return FreetService(
            freet_repository=freet_repository,
            user_repository=user_repository,
            storage_settings=storage_settings,
            log=log,
        )

    @provide
    def get_feed_service(
        self,
        freet_service: FreetService,
        user_repository: UserRepository,
        storage_settings: StorageSettings,
        log: logfire.Logfire,
    ) -> FeedService:
        """Provide feed domain service."""
        return FeedService(
            freet_service=freet_service,
            user_repository=user_repository,
            storage_settings=storage_settings,
            log=log,
        )
