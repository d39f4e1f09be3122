"""Repository interfaces for the Fritter domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from fritter.domain.repository.freet import FreetRepository
from fritter.domain.repository.user import UserRepository

__all__ = [
    "FreetRepository",
    "UserRepository",
]
