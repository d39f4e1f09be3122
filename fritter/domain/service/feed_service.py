"""Feed domain service."""

import logfire

from fritter.config import StorageSettings
from fritter.domain.error import AuthorNotFoundError, UserNotFoundError
from fritter.domain.model import Freet
from fritter.domain.repository import UserRepository
from fritter.domain.value import FreetId, UserId, Username

from .base import Service, within_deadline
from .freet_service import FreetService


class FeedService(Service):
    """Domain service assembling read-only freet feeds."""

    def __init__(
        self,
        freet_service: FreetService,
        user_repository: UserRepository,
        storage_settings: StorageSettings,
        log: logfire.Logfire,
    ) -> None:
        """Initialize feed service.

        Args:
            freet_service: Freet domain service
            user_repository: Identity store used to resolve users and friends
            storage_settings: Storage settings (default deadline)
            log: Logfire instance for spans and events
        """
        self.freet_service = freet_service
        self.user_repository = user_repository
        self.storage_settings = storage_settings
        self.log = log

    def _deadline(self, timeout: float | None) -> float | None:
        if timeout is None:
            return self.storage_settings.operation_timeout
        return timeout

    async def get_feed_by_author_username(
        self, username: Username, *, timeout: float | None = None
    ) -> list[Freet]:
        """Get every freet by the user with the given username.

        Args:
            username: Author's username

        Returns:
            The author's freets, in store order

        Raises:
            AuthorNotFoundError: If the username doesn't resolve
        """
        with self.log.span(
            "feed_service.get_feed_by_author_username", username=username.root
        ):
            async with within_deadline(
                "get_feed_by_author_username", self._deadline(timeout)
            ):
                author = await self.user_repository.find_by_username(username)
                if author is None:
                    self.log.warn("Author not found", username=username.root)
                    raise AuthorNotFoundError(username.root)

                return await self.freet_service.get_freets_by_author(
                    author.id, timeout=timeout
                )

    async def get_friend_feed(
        self, user_id: UserId, *, timeout: float | None = None
    ) -> list[Freet]:
        """Get the freets of every friend of a user.

        Friends are looked up one after another and their freets merged into
        a single list keyed by freet ID, then ordered by date_modified
        descending. Friend usernames that no longer resolve are skipped.

        Args:
            user_id: ID of the user whose friends' freets are wanted

        Returns:
            Merged friend freets, most recently modified first

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        with self.log.span("feed_service.get_friend_feed", user_id=str(user_id)):
            async with within_deadline("get_friend_feed", self._deadline(timeout)):
                user = await self.user_repository.find_by_id(user_id)
                if user is None:
                    self.log.warn("User not found for friend feed", user_id=str(user_id))
                    raise UserNotFoundError(str(user_id))

                merged: dict[FreetId, Freet] = {}
                for friend in dict.fromkeys(user.friends):
                    try:
                        friend_freets = await self.get_feed_by_author_username(
                            friend, timeout=timeout
                        )
                    except AuthorNotFoundError:
                        self.log.warn(
                            "Skipping unresolvable friend",
                            user_id=str(user_id),
                            friend=friend.root,
                        )
                        continue

                    for freet in friend_freets:
                        merged[freet.id] = freet

            feed = sorted(merged.values(), key=lambda f: f.date_modified, reverse=True)
            self.log.info(
                "Friend feed assembled",
                user_id=str(user_id),
                friend_count=len(user.friends),
                count=len(feed),
            )
            return feed
