"""Base service class for domain services."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fritter.domain.error import StorageUnavailableError


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


@asynccontextmanager
async def within_deadline(operation: str, seconds: float | None) -> AsyncIterator[None]:
    """Bound the wrapped store calls by a deadline.

    Work still pending when the deadline passes is cancelled and reported as
    StorageUnavailableError. None means no deadline.

    Args:
        operation: Operation name for the error message
        seconds: Deadline in seconds, or None

    Raises:
        StorageUnavailableError: If the deadline passes
    """
    try:
        async with asyncio.timeout(seconds):
            yield
    except TimeoutError as e:
        raise StorageUnavailableError(
            operation, f"deadline of {seconds}s exceeded"
        ) from e
