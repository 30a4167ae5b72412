"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SelfVoteForbiddenError(DomainError):
    """Raised when self-voting is disabled and a user votes on their own content."""

    def __init__(self, user_id: str, votable_id: str):
        self.user_id = user_id
        self.votable_id = votable_id
        super().__init__(f"User {user_id} cannot vote on their own content {votable_id}")


class ConflictError(DomainError):
    """Concurrent modification detected while applying a vote.

    Resolved internally by retrying; never surfaced to callers.
    """

    pass


class StorageUnavailableError(DomainError):
    """Storage kept failing after the retry budget was exhausted."""

    def __init__(self, operation: str, attempts: int):
        self.operation = operation
        self.attempts = attempts
        super().__init__(f"{operation} failed after {attempts} attempts")
