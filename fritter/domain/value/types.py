"""Domain value objects for Fritter."""

from enum import Enum

from pydantic import field_validator

from fritter.domain.value.common import RootValueObject


class VoteType(str, Enum):
    """Vote a user can request on a freet.

    NO_VOTE withdraws whatever vote the user currently holds.
    """

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"
    NO_VOTE = "no vote"


class Username(RootValueObject[str]):
    """Human-readable user name as known to the identity store."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        return v
