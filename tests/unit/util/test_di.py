"""Unit tests for provider selection and container wiring."""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fritter.domain.error import StorageUnavailableError
from fritter.util.di import PersistenceProvider, ProdConfigProvider, get_provider
from fritter.util.di.container import create_container
from fritter.util.di.infrastructure import ProdPersistenceProvider
from tests.di import MockPersistenceProvider, build_test_container


class RecordingSession:
    """Session stand-in that records how its request ended."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def commit(self) -> None:
        self.calls.append("commit")

    async def rollback(self) -> None:
        self.calls.append("rollback")


class RecordingSessionFactoryProvider(Provider):
    """Replaces the engine-backed session factory with one handing out a RecordingSession."""

    def __init__(self, session: RecordingSession) -> None:
        super().__init__()
        self.session = session

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: self.session


def _session_container(session: RecordingSession):
    return make_async_container(
        ProdConfigProvider(),
        ProdPersistenceProvider(),
        RecordingSessionFactoryProvider(session),
    )


class TestGetProvider:
    """Tests for get_provider()."""

    def test_concrete_provider_is_returned_as_is(self):
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_mockable_component_selects_by_flag(self):
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider


class TestContainers:
    """Container construction without touching the database."""

    @pytest.mark.asyncio
    async def test_production_container_builds(self):
        container = create_container()
        await container.close()

    def test_unknown_component_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"search"})


class TestRequestSession:
    """Tests for the request-scoped session's commit/rollback decision."""

    @pytest.mark.asyncio
    async def test_clean_request_commits(self):
        # Arrange
        session = RecordingSession()
        container = _session_container(session)

        # Act
        async with container() as request_container:
            assert await request_container.get(AsyncSession) is session
        await container.close()

        # Assert
        assert session.calls == ["commit"]

    @pytest.mark.asyncio
    async def test_timed_out_request_rolls_back(self):
        """A request ending in a deadline failure must not commit its writes."""
        # Arrange
        session = RecordingSession()
        container = _session_container(session)

        # Act
        with pytest.raises(StorageUnavailableError):
            async with container() as request_container:
                await request_container.get(AsyncSession)
                raise StorageUnavailableError("update_vote", "deadline of 0.05s exceeded")
        await container.close()

        # Assert
        assert session.calls == ["rollback"]
