"""Domain model entities for Fritter."""

from fritter.domain.model.freet import Freet
from fritter.domain.model.user import Author, User

__all__ = [
    "Author",
    "Freet",
    "User",
]
