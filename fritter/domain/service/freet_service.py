"""Freet domain service."""

from typing import Sequence
from uuid import uuid4

import logfire

from fritter.config import StorageSettings
from fritter.domain.error import FreetNotFoundError, InvariantViolationError
from fritter.domain.model import Author, Freet
from fritter.domain.model.common import utcnow
from fritter.domain.repository import FreetRepository, UserRepository
from fritter.domain.value import FreetId, UserId, VoteType

from .base import Service, within_deadline


class FreetService(Service):
    """Domain service owning freet records and their vote state.

    Every operation takes an optional ``timeout`` in seconds. When omitted,
    the configured storage operation timeout applies.
    """

    def __init__(
        self,
        freet_repository: FreetRepository,
        user_repository: UserRepository,
        storage_settings: StorageSettings,
        log: logfire.Logfire,
    ) -> None:
        """Initialize freet service.

        Args:
            freet_repository: Freet repository
            user_repository: Identity store used to resolve authors
            storage_settings: Storage settings (default deadline)
            log: Logfire instance for spans and events
        """
        self.freet_repository = freet_repository
        self.user_repository = user_repository
        self.storage_settings = storage_settings
        self.log = log

    def _deadline(self, timeout: float | None) -> float | None:
        if timeout is None:
            return self.storage_settings.operation_timeout
        return timeout

    async def _resolve_authors(self, freets: Sequence[Freet]) -> list[Freet]:
        """Attach the resolved author to each freet.

        Authors are looked up in a single batch query against the identity
        store. Authors the store no longer knows are left as None.
        """
        if not freets:
            return []

        author_ids = list({freet.author_id for freet in freets})
        users = await self.user_repository.find_by_ids(author_ids)
        authors = {user.id: Author.from_user(user) for user in users}

        missing = [str(author_id) for author_id in author_ids if author_id not in authors]
        if missing:
            self.log.warn("Freet authors not found in identity store", author_ids=missing)

        return [
            freet.model_copy(update={"author": authors.get(freet.author_id)})
            for freet in freets
        ]

    async def create_freet(
        self,
        author_id: UserId,
        content: str,
        anonymous: bool = False,
        *,
        timeout: float | None = None,
    ) -> Freet:
        """Create a freet.

        Args:
            author_id: Author's user ID
            content: Freet text
            anonymous: Whether the freet is posted anonymously

        Returns:
            Created freet with its author resolved

        Raises:
            StorageUnavailableError: If the store fails or the deadline passes
        """
        with self.log.span(
            "freet_service.create_freet", author_id=str(author_id), anonymous=anonymous
        ):
            now = utcnow()
            freet = Freet(
                id=FreetId(uuid4()),
                author_id=author_id,
                content=content,
                anonymous=anonymous,
                date_created=now,
                date_modified=now,
            )

            async with within_deadline("create_freet", self._deadline(timeout)):
                saved = await self.freet_repository.save(freet)
                [resolved] = await self._resolve_authors([saved])

            self.log.info("Freet created", freet_id=str(resolved.id))
            return resolved

    async def get_freet_by_id(
        self, freet_id: FreetId, *, timeout: float | None = None
    ) -> Freet | None:
        """Get a freet by ID.

        Args:
            freet_id: Freet ID

        Returns:
            Freet if found, None otherwise
        """
        with self.log.span("freet_service.get_freet_by_id", freet_id=str(freet_id)):
            async with within_deadline("get_freet_by_id", self._deadline(timeout)):
                freet = await self.freet_repository.find_by_id(freet_id)
                if freet is None:
                    self.log.info("Freet not found", freet_id=str(freet_id))
                    return None
                [resolved] = await self._resolve_authors([freet])

            return resolved

    async def get_all_freets(self, *, timeout: float | None = None) -> list[Freet]:
        """Get every freet, most recently modified first."""
        with self.log.span("freet_service.get_all_freets"):
            async with within_deadline("get_all_freets", self._deadline(timeout)):
                freets = await self.freet_repository.find_all()
                resolved = await self._resolve_authors(freets)

            self.log.info("Freets listed", count=len(resolved))
            return resolved

    async def get_freets_by_author(
        self, author_id: UserId, *, timeout: float | None = None
    ) -> list[Freet]:
        """Get every freet by an author, in store order.

        Args:
            author_id: Author's user ID

        Returns:
            Freets by the author (possibly empty)
        """
        with self.log.span(
            "freet_service.get_freets_by_author", author_id=str(author_id)
        ):
            async with within_deadline("get_freets_by_author", self._deadline(timeout)):
                freets = await self.freet_repository.find_by_author(author_id)
                resolved = await self._resolve_authors(freets)

            self.log.info(
                "Freets by author listed", author_id=str(author_id), count=len(resolved)
            )
            return resolved

    async def update_content(
        self, freet_id: FreetId, content: str, *, timeout: float | None = None
    ) -> Freet:
        """Replace a freet's content.

        Content is stored as given; validation belongs to the caller.

        Args:
            freet_id: Freet ID
            content: New content

        Returns:
            Updated freet

        Raises:
            FreetNotFoundError: If the freet doesn't exist
            StorageUnavailableError: If the store fails or the deadline passes
        """
        with self.log.span(
            "freet_service.update_content",
            freet_id=str(freet_id),
            content_length=len(content),
        ):
            async with within_deadline("update_content", self._deadline(timeout)):
                updated = await self.freet_repository.update_content(
                    freet_id, content, utcnow()
                )
                if updated is None:
                    self.log.warn("Freet not found for content update", freet_id=str(freet_id))
                    raise FreetNotFoundError(str(freet_id))
                [resolved] = await self._resolve_authors([updated])

            self.log.info("Freet content updated", freet_id=str(freet_id))
            return resolved

    async def update_vote(
        self,
        freet_id: FreetId,
        voter_id: UserId,
        vote: VoteType,
        *,
        timeout: float | None = None,
    ) -> Freet:
        """Set a user's vote on a freet.

        UPVOTE leaves the voter in upvoters only, DOWNVOTE in downvoters only,
        NO_VOTE in neither. Repeating a request leaves the sets unchanged.
        date_modified is touched on every call, including no-op withdrawals.

        Args:
            freet_id: Freet ID
            voter_id: User casting or withdrawing the vote
            vote: Requested vote

        Returns:
            Updated freet

        Raises:
            FreetNotFoundError: If the freet doesn't exist
            InvariantViolationError: If the voter ends up in both vote sets
            StorageUnavailableError: If the store fails or the deadline passes
        """
        with self.log.span(
            "freet_service.update_vote",
            freet_id=str(freet_id),
            voter_id=str(voter_id),
            vote=vote.value,
        ):
            async with within_deadline("update_vote", self._deadline(timeout)):
                updated = await self.freet_repository.update_vote(
                    freet_id, voter_id, vote, utcnow()
                )
                if updated is None:
                    self.log.warn("Vote on non-existent freet", freet_id=str(freet_id))
                    raise FreetNotFoundError(str(freet_id))

                try:
                    updated.check_vote_invariant()
                except InvariantViolationError as e:
                    self.log.error(
                        "Vote sets overlap after transition",
                        freet_id=str(freet_id),
                        voter_ids=e.voter_ids,
                    )
                    raise

                [resolved] = await self._resolve_authors([updated])

            self.log.info(
                "Vote updated",
                freet_id=str(freet_id),
                voter_id=str(voter_id),
                vote=vote.value,
                score=resolved.score,
            )
            return resolved

    async def delete_freet(
        self, freet_id: FreetId, *, timeout: float | None = None
    ) -> bool:
        """Delete a freet.

        Args:
            freet_id: Freet ID

        Returns:
            True if the freet existed and was deleted, False otherwise
        """
        with self.log.span("freet_service.delete_freet", freet_id=str(freet_id)):
            async with within_deadline("delete_freet", self._deadline(timeout)):
                deleted = await self.freet_repository.delete(freet_id)

            if deleted:
                self.log.info("Freet deleted", freet_id=str(freet_id))
            else:
                self.log.info("No freet to delete", freet_id=str(freet_id))
            return deleted

    async def delete_freets_by_author(
        self, author_id: UserId, *, timeout: float | None = None
    ) -> int:
        """Delete every freet by an author.

        Args:
            author_id: Author's user ID

        Returns:
            Number of freets deleted
        """
        with self.log.span(
            "freet_service.delete_freets_by_author", author_id=str(author_id)
        ):
            async with within_deadline("delete_freets_by_author", self._deadline(timeout)):
                count = await self.freet_repository.delete_by_author(author_id)

            self.log.info("Freets by author deleted", author_id=str(author_id), count=count)
            return count
