"""Mock persistence providers for testing."""

from dishka import Scope, provide

from fritter.domain.repository import FreetRepository, UserRepository
from fritter.persistence.repository.inmemory import (
    InMemoryFreetRepository,
    InMemoryUserRepository,
)
from fritter.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_freet_repository(self) -> FreetRepository:
        """Provide in-memory freet repository."""
        return InMemoryFreetRepository()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()
