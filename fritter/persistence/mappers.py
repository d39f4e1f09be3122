"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from fritter.domain.model import Freet, User
from fritter.domain.value import FreetId, UserId, Username


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        friends=[Username(name) for name in row.get("friends") or []],
    )


def row_to_freet(
    row: Dict[str, Any],
    upvoters: Iterable[UUID] = (),
    downvoters: Iterable[UUID] = (),
) -> Freet:
    """Convert database row to Freet domain model.

    Args:
        row: Database row as dict
        upvoters: Voter IDs with an upvote row for this freet
        downvoters: Voter IDs with a downvote row for this freet

    Returns:
        Freet domain model (author left unresolved)
    """
    return Freet(
        id=FreetId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        anonymous=row["anonymous"],
        date_created=row["date_created"],
        date_modified=row["date_modified"],
        upvoters=frozenset(UserId(_uuid(v)) for v in upvoters),
        downvoters=frozenset(UserId(_uuid(v)) for v in downvoters),
    )


def freet_to_dict(freet: Freet) -> Dict[str, Any]:
    """Convert Freet domain model to a freets table row.

    Vote sets live in their own table and the author is resolved on read,
    so both are left out.

    Args:
        freet: Freet domain model

    Returns:
        Dict suitable for database insertion
    """
    return freet.model_dump(exclude={"author", "upvoters", "downvoters"})
