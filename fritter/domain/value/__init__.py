"""Domain value objects for Fritter."""

from fritter.domain.value.identifiers import FreetId, UserId
from fritter.domain.value.types import Username, VoteType

__all__ = [
    # Identifiers
    "FreetId",
    "UserId",
    # Types
    "Username",
    "VoteType",
]
