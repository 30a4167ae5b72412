"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Unit-of-work boundary shared by all repositories of a request.

    Everything done through the repositories inside ``atomic()`` either
    commits together or is rolled back together. Blocks may be nested; a
    failing inner block rolls back only its own work.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block.

        Usage:
            async with transactions.atomic():
                await vote_repository.cast(...)
                await karma_repository.apply_delta(...)
        """
        pass
