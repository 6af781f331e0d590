"""Protocol for User repository."""

from typing import Protocol

from talkbuddy.domain.common.value_objects.ids import UserId
from talkbuddy.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    """Protocol for User repository operations."""

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Args:
            user_id: The user ID

        Returns:
            User entity if found, None otherwise
        """
        ...
