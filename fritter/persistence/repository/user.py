"""PostgreSQL implementation of User repository.

Reads the identity store's users table. Fritter never writes to it.
"""

from typing import Optional, Sequence

import logfire
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.domain.model import User
from fritter.domain.repository.user import UserRepository
from fritter.domain.value import UserId, Username
from fritter.persistence.database import storage_errors
from fritter.persistence.mappers import row_to_user
from fritter.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        with storage_errors("user_repository.find_by_id"):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

        return row_to_user(row._asdict()) if row else None

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        with storage_errors("user_repository.find_by_username"):
            stmt = select(users_table).where(users_table.c.username == username.root)
            result = await self.session.execute(stmt)
            row = result.fetchone()

        if not row:
            logfire.debug("Username did not resolve", username=username.root)
            return None
        return row_to_user(row._asdict())

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        if not user_ids:
            return []

        with storage_errors("user_repository.find_by_ids"):
            stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
            result = await self.session.execute(stmt)
            return [row_to_user(row._asdict()) for row in result.fetchall()]
