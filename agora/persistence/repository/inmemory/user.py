"""In-memory user repository for testing."""

from typing import List, Optional

from agora.domain.model.user import User
from agora.domain.repository.user import UserRepository
from agora.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def exists(self, user_id: UserId) -> bool:
        """Check whether a user exists."""
        return user_id in self._db.users

    async def find_all_ids(self) -> List[UserId]:
        """List every user ID."""
        return list(self._db.users)
