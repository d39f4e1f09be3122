"""PostgreSQL implementation of Freet repository."""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Any, List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import delete, desc, func, literal, select, update
from sqlalchemy.dialects.postgresql import TIMESTAMP, insert
from sqlalchemy.ext.asyncio import AsyncSession

from fritter.domain.model import Freet
from fritter.domain.repository.freet import FreetRepository
from fritter.domain.value import FreetId, UserId, VoteType
from fritter.persistence.database import storage_errors
from fritter.persistence.mappers import freet_to_dict, row_to_freet
from fritter.persistence.tables import freet_votes_table, freets_table


class PostgresFreetRepository(FreetRepository):
    """PostgreSQL implementation of FreetRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_votes_for_freets(
        self, freet_ids: list[UUID]
    ) -> tuple[dict[UUID, set[UUID]], dict[UUID, set[UUID]]]:
        """Fetch vote sets for multiple freets in a single query.

        Args:
            freet_ids: List of freet IDs

        Returns:
            Two dicts mapping freet_id -> voter IDs: upvoters, downvoters
        """
        upvoters: dict[UUID, set[UUID]] = defaultdict(set)
        downvoters: dict[UUID, set[UUID]] = defaultdict(set)
        if not freet_ids:
            return upvoters, downvoters

        stmt = select(
            freet_votes_table.c.freet_id,
            freet_votes_table.c.voter_id,
            freet_votes_table.c.vote_type,
        ).where(freet_votes_table.c.freet_id.in_(freet_ids))
        result = await self.session.execute(stmt)

        for row in result.fetchall():
            if row.vote_type == VoteType.UPVOTE.value:
                upvoters[row.freet_id].add(row.voter_id)
            else:
                downvoters[row.freet_id].add(row.voter_id)

        return upvoters, downvoters

    async def _rows_to_freets(self, rows: Sequence[Any]) -> List[Freet]:
        """Build Freet domain models, keeping row order."""
        upvoters, downvoters = await self._fetch_votes_for_freets(
            [row.id for row in rows]
        )
        return [
            row_to_freet(
                row._asdict(),
                upvoters=upvoters.get(row.id, ()),
                downvoters=downvoters.get(row.id, ()),
            )
            for row in rows
        ]

    @staticmethod
    def _touched(modified_at: datetime) -> Any:
        """SQL expression for a date_modified strictly after the stored one."""
        return func.greatest(
            literal(modified_at, type_=TIMESTAMP(timezone=True)),
            freets_table.c.date_modified + timedelta(microseconds=1),
        )

    async def find_by_id(self, freet_id: FreetId) -> Optional[Freet]:
        """Find a freet by ID."""
        with logfire.span("freet_repository.find_by_id", freet_id=str(freet_id)):
            with storage_errors("freet_repository.find_by_id"):
                stmt = select(freets_table).where(freets_table.c.id == freet_id)
                result = await self.session.execute(stmt)
                row = result.fetchone()

                if not row:
                    return None

                [freet] = await self._rows_to_freets([row])
                return freet

    async def find_all(self) -> List[Freet]:
        """Find every freet, most recently modified first."""
        with logfire.span("freet_repository.find_all"):
            with storage_errors("freet_repository.find_all"):
                stmt = select(freets_table).order_by(
                    desc(freets_table.c.date_modified),
                    desc(freets_table.c.date_created),
                    freets_table.c.id,
                )
                result = await self.session.execute(stmt)
                freets = await self._rows_to_freets(result.fetchall())

            logfire.info("Found freets", count=len(freets))
            return freets

    async def find_by_author(self, author_id: UserId) -> List[Freet]:
        """Find freets by a specific author."""
        with logfire.span("freet_repository.find_by_author", author_id=str(author_id)):
            with storage_errors("freet_repository.find_by_author"):
                stmt = select(freets_table).where(freets_table.c.author_id == author_id)
                result = await self.session.execute(stmt)
                return await self._rows_to_freets(result.fetchall())

    async def save(self, freet: Freet) -> Freet:
        """Insert a new freet."""
        with logfire.span(
            "freet_repository.save",
            freet_id=str(freet.id),
            author_id=str(freet.author_id),
        ):
            with storage_errors("freet_repository.save"):
                stmt = freets_table.insert().values(**freet_to_dict(freet))
                await self.session.execute(stmt)
                await self.session.flush()

            logfire.info("Freet inserted", freet_id=str(freet.id))
            return freet

    async def update_content(
        self, freet_id: FreetId, content: str, modified_at: datetime
    ) -> Optional[Freet]:
        """Replace the content of a freet and touch date_modified."""
        with logfire.span(
            "freet_repository.update_content",
            freet_id=str(freet_id),
            content_length=len(content),
        ):
            with storage_errors("freet_repository.update_content"):
                stmt = (
                    update(freets_table)
                    .where(freets_table.c.id == freet_id)
                    .values(content=content, date_modified=self._touched(modified_at))
                    .returning(freets_table)
                )
                result = await self.session.execute(stmt)
                row = result.fetchone()

                if row is None:
                    logfire.warn("Freet not found", freet_id=str(freet_id))
                    return None

                await self.session.flush()
                [freet] = await self._rows_to_freets([row])
                return freet

    async def update_vote(
        self,
        freet_id: FreetId,
        voter_id: UserId,
        vote: VoteType,
        modified_at: datetime,
    ) -> Optional[Freet]:
        """Set a single voter's vote on a freet and touch date_modified.

        The freet row is touched first, which takes its row lock for the rest
        of the transaction. The voter's membership is then changed with a
        single upsert or delete on freet_votes, never by rewriting the sets.
        """
        with logfire.span(
            "freet_repository.update_vote",
            freet_id=str(freet_id),
            voter_id=str(voter_id),
            vote=vote.value,
        ):
            with storage_errors("freet_repository.update_vote"):
                touch = (
                    update(freets_table)
                    .where(freets_table.c.id == freet_id)
                    .values(date_modified=self._touched(modified_at))
                    .returning(freets_table.c.id)
                )
                result = await self.session.execute(touch)
                if result.fetchone() is None:
                    logfire.warn("Freet not found", freet_id=str(freet_id))
                    return None

                if vote == VoteType.NO_VOTE:
                    stmt = delete(freet_votes_table).where(
                        freet_votes_table.c.freet_id == freet_id,
                        freet_votes_table.c.voter_id == voter_id,
                    )
                else:
                    upsert = insert(freet_votes_table).values(
                        freet_id=freet_id, voter_id=voter_id, vote_type=vote.value
                    )
                    stmt = upsert.on_conflict_do_update(
                        index_elements=[
                            freet_votes_table.c.freet_id,
                            freet_votes_table.c.voter_id,
                        ],
                        set_={"vote_type": upsert.excluded.vote_type},
                    )
                await self.session.execute(stmt)
                await self.session.flush()

                return await self.find_by_id(freet_id)

    async def delete(self, freet_id: FreetId) -> bool:
        """Delete a freet (hard delete). Vote rows cascade."""
        with logfire.span("freet_repository.delete", freet_id=str(freet_id)):
            with storage_errors("freet_repository.delete"):
                stmt = (
                    delete(freets_table)
                    .where(freets_table.c.id == freet_id)
                    .returning(freets_table.c.id)
                )
                result = await self.session.execute(stmt)
                deleted = result.fetchone() is not None
                await self.session.flush()
                return deleted

    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete every freet by an author."""
        with logfire.span("freet_repository.delete_by_author", author_id=str(author_id)):
            with storage_errors("freet_repository.delete_by_author"):
                stmt = delete(freets_table).where(freets_table.c.author_id == author_id)
                result = await self.session.execute(stmt)
                await self.session.flush()

            logfire.info(
                "Deleted freets by author", author_id=str(author_id), count=result.rowcount
            )
            return result.rowcount
