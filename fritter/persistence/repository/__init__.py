"""PostgreSQL repository implementations."""

from fritter.persistence.repository.freet import PostgresFreetRepository
from fritter.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresFreetRepository",
    "PostgresUserRepository",
]
