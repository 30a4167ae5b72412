"""In-memory transaction boundary for testing."""

from contextlib import AbstractAsyncContextManager

from agora.domain.repository.transaction import TransactionManager

from .database import InMemoryDatabase


class InMemoryTransactionManager(TransactionManager):
    """In-memory implementation of TransactionManager for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block on the shared database."""
        return self._db.transaction()
