"""User projection of the external identity store.

Fritter does not own users. It only reads who a user is and which
usernames they count as friends.
"""

from pydantic import Field

from fritter.domain.model.common import DomainModel
from fritter.domain.value import UserId, Username


class User(DomainModel):
    """Identity as resolved from the identity store."""

    id: UserId
    username: Username
    friends: list[Username] = Field(default_factory=list)


class Author(DomainModel):
    """Resolved author reference attached to a freet."""

    id: UserId
    username: Username

    @classmethod
    def from_user(cls, user: User) -> "Author":
        """Build an author reference from an identity record."""
        return cls(id=user.id, username=user.username)
