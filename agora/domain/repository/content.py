"""Content repository interface.

Posts and comments are owned by the surrounding application. The karma
engine only reads who wrote a votable item.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from agora.domain.value import UserId, VotableType


class ContentRepository(ABC):
    """Read-only access to votable content."""

    @abstractmethod
    async def exists(self, votable_type: VotableType, votable_id: UUID) -> bool:
        """Check whether a votable item exists and is not deleted.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            True if the item can be voted on
        """
        pass

    @abstractmethod
    async def find_author(
        self, votable_type: VotableType, votable_id: UUID
    ) -> Optional[UserId]:
        """Find the author of a votable item.

        Inside an atomic block the item is protected from deletion until the
        block's transaction ends.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            Author ID if the item exists and is not deleted, None otherwise
        """
        pass
