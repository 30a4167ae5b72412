"""PostgreSQL implementation of User repository."""

from typing import List, Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import User
from agora.domain.repository import UserRepository
from agora.domain.value import UserId
from agora.persistence.mappers import row_to_user
from agora.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def exists(self, user_id: UserId) -> bool:
        """Check whether a user exists."""
        stmt = select(exists().where(users_table.c.id == user_id))
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def find_all_ids(self) -> List[UserId]:
        """List every user ID, oldest account first."""
        stmt = select(users_table.c.id).order_by(users_table.c.created_at)
        result = await self.session.execute(stmt)
        return [UserId(user_id) for user_id in result.scalars().all()]
