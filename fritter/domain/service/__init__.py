"""Domain services."""

from .base import Service, within_deadline
from .feed_service import FeedService
from .freet_service import FreetService

__all__ = [
    "FeedService",
    "FreetService",
    "Service",
    "within_deadline",
]
