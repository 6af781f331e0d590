"""Protocol for Attempt repository in learning context."""

from typing import Protocol

from talkbuddy.domain.common.value_objects import OutcomeCounts
from talkbuddy.domain.common.value_objects.ids import UserId
from talkbuddy.domain.learning.entities.attempt import Attempt


class AttemptRepositoryProtocol(Protocol):
    """Protocol for Attempt repository operations in learning context."""

    def find_recent_by_user(self, user_id: UserId, limit: int | None = None) -> list[Attempt]:
        """
        Get a user's attempts, newest first.

        Args:
            user_id: The user ID
            limit: Maximum number of attempts, None for the full history

        Returns:
            List of attempt entities ordered by created_at DESC
        """
        ...

    def count_outcomes(self, user_id: UserId) -> OutcomeCounts:
        """
        Aggregate correct/total counts over all of a user's attempts.

        Args:
            user_id: The user ID

        Returns:
            Lifetime outcome counts
        """
        ...

    def save(self, attempt: Attempt) -> Attempt:
        """
        Persist a new attempt.

        Args:
            attempt: The attempt entity to save

        Returns:
            Saved attempt entity with database-generated values
        """
        ...
