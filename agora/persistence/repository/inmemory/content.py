"""In-memory content repository for testing."""

from typing import Optional
from uuid import UUID

from agora.domain.repository.content import ContentRepository
from agora.domain.value import UserId, VotableType

from .database import InMemoryDatabase


class InMemoryContentRepository(ContentRepository):
    """In-memory implementation of ContentRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def exists(self, votable_type: VotableType, votable_id: UUID) -> bool:
        """Check whether a votable item exists and is not deleted."""
        return await self.find_author(votable_type, votable_id) is not None

    async def find_author(
        self, votable_type: VotableType, votable_id: UUID
    ) -> Optional[UserId]:
        """Find the author of a votable item."""
        entry = self._db.content.get((votable_type, UUID(str(votable_id))))
        if entry is None:
            return None
        author_id, deleted = entry
        return None if deleted else author_id
