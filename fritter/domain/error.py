"""Domain layer errors."""

from typing import Iterable


class DomainError(Exception):
    """Base domain error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class InvariantViolationError(BusinessRuleViolationError):
    """Raised when a vote transition would leave a voter in both vote sets."""

    def __init__(self, freet_id: str, voter_ids: Iterable[str]):
        self.freet_id = freet_id
        self.voter_ids = sorted(voter_ids)
        super().__init__(
            f"Freet {freet_id} has voters in both upvoters and downvoters: "
            f"{', '.join(self.voter_ids)}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class FreetNotFoundError(NotFoundError):
    """Raised when the target freet does not exist."""

    def __init__(self, freet_id: str):
        super().__init__("Freet", freet_id)


class AuthorNotFoundError(NotFoundError):
    """Raised when an author username cannot be resolved."""

    def __init__(self, username: str):
        super().__init__("Author", username)


class UserNotFoundError(NotFoundError):
    """Raised when a user id cannot be resolved."""

    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class StorageUnavailableError(DomainError):
    """Raised when the durable store fails or misses its deadline.

    Transient: callers may retry with backoff.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Storage unavailable during {operation}: {reason}")
