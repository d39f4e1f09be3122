"""Freet aggregate root.

A freet is a short text post. Besides its content it carries the set of
users currently upvoting it and the set currently downvoting it.
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import Field, model_validator

from fritter.domain.error import InvariantViolationError
from fritter.domain.model.common import DomainModel, utcnow
from fritter.domain.model.user import Author
from fritter.domain.value import FreetId, UserId, VoteType

# Smallest step a touched timestamp advances by when the clock has not moved.
_TICK = timedelta(microseconds=1)


def next_modified(previous: datetime, now: datetime) -> datetime:
    """Return a modification time strictly after ``previous``."""
    return max(now, previous + _TICK)


class Freet(DomainModel):
    """Freet aggregate root.

    Business rules:
    - A voter is never in both upvoters and downvoters
    - date_modified is never earlier than date_created
    - author is attached by the service layer, repositories leave it None
    """

    id: FreetId
    author_id: UserId
    author: Optional[Author] = None
    content: str
    anonymous: bool = False
    date_created: datetime = Field(default_factory=utcnow)
    date_modified: datetime = Field(default_factory=utcnow)
    upvoters: frozenset[UserId] = frozenset()
    downvoters: frozenset[UserId] = frozenset()

    @model_validator(mode="after")
    def validate_timestamps(self) -> "Freet":
        """Validate that the record was not modified before it was created."""
        if self.date_modified < self.date_created:
            raise ValueError("date_modified cannot be earlier than date_created")
        return self

    @property
    def upvote_count(self) -> int:
        return len(self.upvoters)

    @property
    def downvote_count(self) -> int:
        return len(self.downvoters)

    @property
    def score(self) -> int:
        """Net vote tally."""
        return self.upvote_count - self.downvote_count

    def vote_of(self, voter_id: UserId) -> VoteType:
        """Return the vote the given user currently holds on this freet."""
        if voter_id in self.upvoters:
            return VoteType.UPVOTE
        if voter_id in self.downvoters:
            return VoteType.DOWNVOTE
        return VoteType.NO_VOTE

    def check_vote_invariant(self) -> None:
        """Raise if any voter sits in both vote sets.

        Raises:
            InvariantViolationError: If upvoters and downvoters overlap
        """
        overlap = self.upvoters & self.downvoters
        if overlap:
            raise InvariantViolationError(str(self.id), (str(v) for v in overlap))

    def with_content(self, content: str, now: datetime) -> "Freet":
        """Return a copy with new content and a touched date_modified."""
        return self.model_copy(
            update={
                "content": content,
                "date_modified": next_modified(self.date_modified, now),
            }
        )

    def with_vote(self, voter_id: UserId, vote: VoteType, now: datetime) -> "Freet":
        """Return a copy with the voter's vote set to ``vote``.

        The voter is always removed from the opposite set before being added,
        so the result holds the voter in at most one set. date_modified is
        touched even when membership does not change.

        Args:
            voter_id: User casting or withdrawing the vote
            vote: Requested vote
            now: Current time

        Returns:
            Updated freet

        Raises:
            InvariantViolationError: If the resulting sets overlap
        """
        upvoters = self.upvoters - {voter_id}
        downvoters = self.downvoters - {voter_id}
        if vote == VoteType.UPVOTE:
            upvoters = upvoters | {voter_id}
        elif vote == VoteType.DOWNVOTE:
            downvoters = downvoters | {voter_id}

        updated = self.model_copy(
            update={
                "upvoters": upvoters,
                "downvoters": downvoters,
                "date_modified": next_modified(self.date_modified, now),
            }
        )
        updated.check_vote_invariant()
        return updated
