"""PostgreSQL implementation of Content repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import Select, and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.repository import ContentRepository
from agora.domain.value import UserId, VotableType
from agora.persistence.tables import comments_table, posts_table


class PostgresContentRepository(ContentRepository):
    """Reads post and comment authorship from the content tables."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def exists(self, votable_type: VotableType, votable_id: UUID) -> bool:
        """Check whether a votable item exists and is not deleted."""
        result = await self.session.execute(_author_of(votable_type, votable_id))
        return result.scalar_one_or_none() is not None

    async def find_author(
        self, votable_type: VotableType, votable_id: UUID
    ) -> Optional[UserId]:
        """Find the author of a votable item.

        Takes FOR SHARE on the content row, so the item cannot be deleted or
        soft-deleted until the vote's transaction ends.
        """
        stmt = _author_of(votable_type, votable_id).with_for_update(read=True)
        result = await self.session.execute(stmt)
        author_id = result.scalar_one_or_none()
        return UserId(author_id) if author_id is not None else None


def _author_of(votable_type: VotableType, votable_id: UUID) -> Select:
    table = posts_table if votable_type == VotableType.POST else comments_table
    return select(table.c.author_id).where(
        and_(table.c.id == votable_id, table.c.deleted_at.is_(None))
    )
