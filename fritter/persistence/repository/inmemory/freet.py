"""In-memory freet repository for testing."""

from datetime import datetime
from typing import Optional

from fritter.domain.model.freet import Freet
from fritter.domain.repository.freet import FreetRepository
from fritter.domain.value import FreetId, UserId, VoteType


class InMemoryFreetRepository(FreetRepository):
    """In-memory implementation of FreetRepository for testing.

    Each mutation reads and writes the stored record without awaiting in
    between, so it is atomic with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._freets: dict[FreetId, Freet] = {}

    async def find_by_id(self, freet_id: FreetId) -> Optional[Freet]:
        """Find a freet by ID."""
        return self._freets.get(freet_id)

    async def find_all(self) -> list[Freet]:
        """Find every freet, most recently modified first.

        sorted() is stable, so ties keep insertion order.
        """
        return sorted(
            self._freets.values(), key=lambda f: f.date_modified, reverse=True
        )

    async def find_by_author(self, author_id: UserId) -> list[Freet]:
        """Find freets by a specific author."""
        return [f for f in self._freets.values() if f.author_id == author_id]

    async def save(self, freet: Freet) -> Freet:
        """Save a freet."""
        self._freets[freet.id] = freet
        return freet

    async def update_content(
        self, freet_id: FreetId, content: str, modified_at: datetime
    ) -> Optional[Freet]:
        """Replace the content of a freet."""
        freet = self._freets.get(freet_id)
        if freet is None:
            return None

        updated = freet.with_content(content, modified_at)
        self._freets[freet_id] = updated
        return updated

    async def update_vote(
        self,
        freet_id: FreetId,
        voter_id: UserId,
        vote: VoteType,
        modified_at: datetime,
    ) -> Optional[Freet]:
        """Set a single voter's vote on a freet."""
        freet = self._freets.get(freet_id)
        if freet is None:
            return None

        updated = freet.with_vote(voter_id, vote, modified_at)
        self._freets[freet_id] = updated
        return updated

    async def delete(self, freet_id: FreetId) -> bool:
        """Delete a freet."""
        return self._freets.pop(freet_id, None) is not None

    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete every freet by an author."""
        doomed = [fid for fid, f in self._freets.items() if f.author_id == author_id]
        for freet_id in doomed:
            del self._freets[freet_id]
        return len(doomed)
