"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.user import User
from agora.domain.value import UserId


class UserRepository(ABC):
    """Read-only access to user accounts."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, user_id: UserId) -> bool:
        """Check whether a user exists.

        Args:
            user_id: The user's unique identifier

        Returns:
            True if the user exists
        """
        pass

    @abstractmethod
    async def find_all_ids(self) -> List[UserId]:
        """List every user ID.

        Returns:
            All user IDs
        """
        pass
