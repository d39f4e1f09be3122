"""Persistence infrastructure providers."""

from collections.abc import AsyncGenerator, AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fritter.config import Settings
from fritter.domain.repository import FreetRepository, UserRepository
from fritter.persistence.database import create_engine, create_session_factory
from fritter.persistence.repository import (
    PostgresFreetRepository,
    PostgresUserRepository,
)
from fritter.util.di.base import ProviderBase
from fritter.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncGenerator[AsyncSession, BaseException | None]:
        """Provide database session for request scope.

        dishka sends the exception that ended the request scope (or None)
        back into the generator. The session is committed only when the
        request finished cleanly, so a failed or timed-out vote update
        leaves nothing behind.
        """
        async with session_factory() as session:
            exc = yield session
            if exc is None:
                await session.commit()
                logfire.info("Session committed")
            else:
                logfire.warn(
                    "Session rollback", error=str(exc), error_type=type(exc).__name__
                )
                await session.rollback()

    @provide(scope=Scope.REQUEST)
    def get_freet_repository(self, session: AsyncSession) -> FreetRepository:
        """Provide Freet repository."""
        return PostgresFreetRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)
