"""In-memory repository implementations for testing."""

from .freet import InMemoryFreetRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryFreetRepository",
    "InMemoryUserRepository",
]
