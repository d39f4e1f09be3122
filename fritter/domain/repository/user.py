"""User repository interface.

Read-only view of the external identity store.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from fritter.domain.model.user import User
from fritter.domain.value import UserId, Username


class UserRepository(ABC):
    """Repository for resolving user identities."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username.

        Args:
            username: The user's username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query).

        Unknown IDs are silently left out of the result.

        Args:
            user_ids: IDs to resolve

        Returns:
            Users that were found
        """
        pass
