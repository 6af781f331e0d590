"""Use case for maintaining a user's best-accuracy achievement."""

import structlog

from talkbuddy.application.progress.protocols.achievement_repository import (
    AchievementRepositoryProtocol,
)
from talkbuddy.domain.common.value_objects import AccuracyRate, UserId
from talkbuddy.domain.progress.entities.achievement import ACCURACY_CRITERION, Achievement
from talkbuddy.exceptions import StorageError

logger = structlog.get_logger(__name__)


class EvaluateAchievementUseCase:
    """Raise, create or keep the accuracy achievement of a user."""

    def __init__(self, achievement_repository: AchievementRepositoryProtocol) -> None:
        self.achievement_repository = achievement_repository

    def evaluate(self, user_id: int, new_rate: float) -> Achievement:
        """
        Record a newly observed accuracy rate against the user's achievement.

        The stored level only moves up: a lower or equal rate leaves the
        achievement untouched, a higher one overwrites level, title and
        description in place.

        Args:
            user_id: ID of the user
            new_rate: Accuracy rate in [0, 1]

        Returns:
            The user's achievement after evaluation

        Raises:
            ValidationError: If new_rate is outside [0, 1]
        """
        user_id_vo = UserId(user_id)
        rate = AccuracyRate(new_rate)

        current = self.achievement_repository.find_top_by_user(user_id_vo, ACCURACY_CRITERION)
        if current is None:
            created = self.achievement_repository.create_for_user(
                user_id_vo, Achievement.for_accuracy(rate)
            )
            if created is not None:
                logger.info(
                    "achievement_created",
                    user_id=user_id,
                    achievement_id=created.id.value,
                    level=created.level,
                )
                return created

            # Lost the creation race; evaluate against the winner instead
            current = self.achievement_repository.find_top_by_user(
                user_id_vo, ACCURACY_CRITERION
            )
            if current is None:
                raise StorageError(f"Achievement for user {user_id} vanished after conflict")

        return self._raise_if_surpassed(current, rate, user_id)

    def _raise_if_surpassed(
        self, achievement: Achievement, rate: AccuracyRate, user_id: int
    ) -> Achievement:
        if not achievement.is_surpassed_by(rate):
            logger.debug(
                "achievement_unchanged",
                user_id=user_id,
                achievement_id=achievement.id.value,
                level=achievement.level,
                rate=rate.value,
            )
            return achievement

        previous_level = achievement.level
        achievement.raise_level(rate)
        if self.achievement_repository.raise_level(achievement):
            logger.info(
                "achievement_raised",
                user_id=user_id,
                achievement_id=achievement.id.value,
                previous_level=previous_level,
                level=achievement.level,
            )
            return achievement

        logger.info(
            "achievement_raise_superseded",
            user_id=user_id,
            achievement_id=achievement.id.value,
            rate=rate.value,
        )
        return self.achievement_repository.get(achievement.id)
