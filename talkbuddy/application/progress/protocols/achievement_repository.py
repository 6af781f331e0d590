"""Protocol for Achievement repository in progress context."""

from typing import Protocol

from talkbuddy.domain.common.value_objects import AchievementId, UserId
from talkbuddy.domain.progress.entities.achievement import Achievement


class AchievementRepositoryProtocol(Protocol):
    """Protocol for Achievement repository operations."""

    def find_top_by_user(self, user_id: UserId, criterion: str) -> Achievement | None:
        """
        Find the user's highest-level achievement for a criterion.

        Args:
            user_id: The user ID
            criterion: Achievement criterion, e.g. "accuracy"

        Returns:
            Achievement entity if the user earned one, None otherwise
        """
        ...

    def create_for_user(self, user_id: UserId, achievement: Achievement) -> Achievement | None:
        """
        Insert an achievement together with the user's link to it.

        Args:
            user_id: The user earning the achievement
            achievement: Unsaved achievement entity

        Returns:
            The saved achievement, or None if the user already holds one for
            this criterion (a concurrent request created it first)
        """
        ...

    def raise_level(self, achievement: Achievement) -> bool:
        """
        Compare-and-set update of level, title and description.

        The row is only written while its stored level is still below the new
        level, so concurrent writers can never lower it.

        Args:
            achievement: Achievement carrying the new level and texts

        Returns:
            True if the row was updated, False if a higher or equal level was
            already stored
        """
        ...

    def get(self, achievement_id: AchievementId) -> Achievement:
        """Load an achievement by ID."""
        ...
