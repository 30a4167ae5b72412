"""Karma ledger repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.karma import KarmaEvent, KarmaSnapshot
from agora.domain.value import KarmaCategory, KarmaEventId, UserId


class KarmaRepository(ABC):
    """Repository for karma ledger entries.

    The only writer of the karma columns. Every mutation is a single atomic
    statement (or runs under the entry's row lock), never a read followed by
    an unguarded write.
    """

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> Optional[KarmaSnapshot]:
        """Find a user's ledger entry.

        Args:
            user_id: Ledger owner

        Returns:
            The entry if it exists, None otherwise
        """
        pass

    @abstractmethod
    async def apply_delta(
        self,
        user_id: UserId,
        category: KarmaCategory,
        delta: int,
        floor: int,
        event_id: Optional[KarmaEventId] = None,
    ) -> tuple[KarmaSnapshot, Optional[int]]:
        """Atomically add a delta to one category, clamping the total at floor.

        The entry is created with zero counters on first touch. When an
        event id is given and was already recorded, nothing is applied.

        Args:
            user_id: Ledger owner
            category: Category to modify
            delta: Signed change
            floor: Minimum total karma
            event_id: Idempotency key of the vote transition

        Returns:
            Tuple of (entry after the call, amount actually added to the
            total after floor clamping). The amount is None when the event
            was already recorded.
        """
        pass

    @abstractmethod
    async def lock(self, user_id: UserId) -> KarmaSnapshot:
        """Create the entry if needed and lock it until the transaction ends.

        Args:
            user_id: Ledger owner

        Returns:
            Current entry
        """
        pass

    @abstractmethod
    async def overwrite(self, snapshot: KarmaSnapshot) -> KarmaSnapshot:
        """Replace post, comment and total karma in one statement.

        Award karma is left as stored.

        Args:
            snapshot: Freshly computed entry

        Returns:
            Entry as stored
        """
        pass

    @abstractmethod
    async def find_top(self, limit: int) -> List[KarmaSnapshot]:
        """Find the entries with the highest total karma.

        Args:
            limit: Maximum number of entries

        Returns:
            Entries ordered by total karma, highest first
        """
        pass

    @abstractmethod
    async def find_events(self, user_id: UserId, limit: int) -> List[KarmaEvent]:
        """Find the most recent karma events for a user.

        Args:
            user_id: Ledger owner
            limit: Maximum number of events

        Returns:
            Events ordered newest first
        """
        pass
