"""Unit tests for FeedService."""

from uuid import uuid4

import pytest

from fritter.domain.error import AuthorNotFoundError, UserNotFoundError
from fritter.domain.repository import FreetRepository, UserRepository
from fritter.domain.service import FeedService
from fritter.domain.value import UserId, Username
from tests.conftest import at, make_freet, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

# logfire severity number for warn
WARN_LEVEL = 13


class TestAuthorFeed:
    """Tests for FeedService.get_feed_by_author_username()."""

    @pytest.mark.asyncio
    async def test_returns_author_freets(self, unit_env):
        # Arrange
        users = await unit_env.get(UserRepository)
        freets = await unit_env.get(FreetRepository)
        alice = await users.save(make_user("alice"))
        bob = await users.save(make_user("bob"))
        mine = await freets.save(make_freet(alice.id, "mine"))
        await freets.save(make_freet(bob.id, "not mine"))
        service = await unit_env.get(FeedService)

        # Act
        feed = await service.get_feed_by_author_username(Username("alice"))

        # Assert
        assert [f.id for f in feed] == [mine.id]
        assert feed[0].author.id == alice.id

    @pytest.mark.asyncio
    async def test_author_without_freets(self, unit_env):
        users = await unit_env.get(UserRepository)
        await users.save(make_user("quiet"))
        service = await unit_env.get(FeedService)

        assert await service.get_feed_by_author_username(Username("quiet")) == []

    @pytest.mark.asyncio
    async def test_unknown_author(self, unit_env):
        service = await unit_env.get(FeedService)

        with pytest.raises(AuthorNotFoundError) as exc_info:
            await service.get_feed_by_author_username(Username("ghost"))

        assert exc_info.value.identifier == "ghost"


class TestFriendFeed:
    """Tests for FeedService.get_friend_feed()."""

    @pytest.mark.asyncio
    async def test_merges_friends_by_date_modified(self, unit_env):
        """Freets of all friends come back newest first across authors."""
        # Arrange
        users = await unit_env.get(UserRepository)
        freets = await unit_env.get(FreetRepository)
        await users.save(make_user("bob"))
        await users.save(make_user("carol"))
        bob = await users.find_by_username(Username("bob"))
        carol = await users.find_by_username(Username("carol"))
        alice = await users.save(make_user("alice", friends=["bob", "carol"]))
        b1 = await freets.save(make_freet(bob.id, "b1", modified=at(2)))
        c1 = await freets.save(make_freet(carol.id, "c1", modified=at(1)))
        c2 = await freets.save(make_freet(carol.id, "c2", modified=at(3)))
        await freets.save(make_freet(alice.id, "own", modified=at(4)))
        service = await unit_env.get(FeedService)

        # Act
        feed = await service.get_friend_feed(alice.id)

        # Assert
        assert [f.id for f in feed] == [c2.id, b1.id, c1.id]

    @pytest.mark.asyncio
    async def test_no_friends(self, unit_env):
        users = await unit_env.get(UserRepository)
        loner = await users.save(make_user("loner"))
        service = await unit_env.get(FeedService)

        assert await service.get_friend_feed(loner.id) == []

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        service = await unit_env.get(FeedService)

        with pytest.raises(UserNotFoundError):
            await service.get_friend_feed(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_unresolvable_friend_is_skipped(self, unit_env, capfire):
        """A friend username the identity store no longer knows is ignored with a warning."""
        users = await unit_env.get(UserRepository)
        freets = await unit_env.get(FreetRepository)
        bob = await users.save(make_user("bob"))
        alice = await users.save(make_user("alice", friends=["deleted", "bob"]))
        b1 = await freets.save(make_freet(bob.id, "b1"))
        service = await unit_env.get(FeedService)

        feed = await service.get_friend_feed(alice.id)

        assert [f.id for f in feed] == [b1.id]
        skipped = [
            span["attributes"]
            for span in capfire.exporter.exported_spans_as_dict()
            if span["attributes"].get("logfire.msg") == "Skipping unresolvable friend"
        ]
        assert len(skipped) == 1
        assert skipped[0]["friend"] == "deleted"
        assert skipped[0]["logfire.level_num"] == WARN_LEVEL

    @pytest.mark.asyncio
    async def test_duplicate_friends_do_not_duplicate_freets(self, unit_env):
        users = await unit_env.get(UserRepository)
        freets = await unit_env.get(FreetRepository)
        bob = await users.save(make_user("bob"))
        alice = await users.save(make_user("alice", friends=["bob", "bob"]))
        await freets.save(make_freet(bob.id, "b1", modified=at(1)))
        await freets.save(make_freet(bob.id, "b2", modified=at(2)))
        service = await unit_env.get(FeedService)

        feed = await service.get_friend_feed(alice.id)

        assert [f.content for f in feed] == ["b2", "b1"]
