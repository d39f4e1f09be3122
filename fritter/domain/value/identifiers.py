"""Strongly typed identifiers for Fritter domain entities.

NewType keeps freet and user identifiers from being mixed up while
staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

FreetId = NewType("FreetId", UUID)
UserId = NewType("UserId", UUID)
