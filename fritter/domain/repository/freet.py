"""Freet repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from fritter.domain.model.freet import Freet
from fritter.domain.value import FreetId, UserId, VoteType


class FreetRepository(ABC):
    """Repository for Freet aggregate.

    Defines the contract for freet persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, freet_id: FreetId) -> Optional[Freet]:
        """Find a freet by ID.

        Args:
            freet_id: The freet's unique identifier

        Returns:
            The freet if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Freet]:
        """Find every freet, most recently modified first.

        Ties on date_modified are broken in a fixed order, so repeated calls
        with no intervening writes return the same sequence.

        Returns:
            List of all freets ordered by date_modified descending
        """
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Freet]:
        """Find freets by a specific author.

        No ordering is guaranteed.

        Args:
            author_id: The author's user ID

        Returns:
            List of freets by the author
        """
        pass

    @abstractmethod
    async def save(self, freet: Freet) -> Freet:
        """Insert a new freet.

        Args:
            freet: The freet to insert

        Returns:
            The saved freet
        """
        pass

    @abstractmethod
    async def update_content(
        self, freet_id: FreetId, content: str, modified_at: datetime
    ) -> Optional[Freet]:
        """Replace the content of a freet and touch date_modified.

        Args:
            freet_id: ID of the freet to update
            content: New content
            modified_at: Modification time (advanced past the stored value if
                the clock has not moved)

        Returns:
            Updated freet, or None if the freet doesn't exist
        """
        pass

    @abstractmethod
    async def update_vote(
        self,
        freet_id: FreetId,
        voter_id: UserId,
        vote: VoteType,
        modified_at: datetime,
    ) -> Optional[Freet]:
        """Set a single voter's vote on a freet and touch date_modified.

        Must be a targeted mutation of the voter's membership, not a
        whole-record overwrite, so concurrent votes from different users
        are all kept.

        Args:
            freet_id: ID of the freet
            voter_id: User casting or withdrawing the vote
            vote: Requested vote
            modified_at: Modification time

        Returns:
            Updated freet, or None if the freet doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, freet_id: FreetId) -> bool:
        """Delete a freet (hard delete).

        Args:
            freet_id: The freet ID to delete

        Returns:
            True if a freet was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete every freet by an author.

        Args:
            author_id: The author's user ID

        Returns:
            Number of freets deleted
        """
        pass
