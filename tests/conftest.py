"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from fritter.domain.model import Freet, User
from fritter.domain.value import FreetId, UserId, Username

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def at(seconds: int) -> datetime:
    """Fixed timestamp ``seconds`` after BASE_TIME, for ordering tests."""
    return BASE_TIME + timedelta(seconds=seconds)


def make_user(username: str, friends: list[str] | None = None) -> User:
    """Build an identity-store user with the given friend usernames."""
    return User(
        id=UserId(uuid4()),
        username=Username(username),
        friends=[Username(name) for name in friends or []],
    )


def make_freet(
    author_id: UserId,
    content: str = "Test freet",
    modified: datetime = BASE_TIME,
    created: datetime | None = None,
) -> Freet:
    """Build a freet with explicit timestamps."""
    return Freet(
        id=FreetId(uuid4()),
        author_id=author_id,
        content=content,
        date_created=created or modified,
        date_modified=modified,
    )
