"""
Achievement entity tracking the best accuracy a learner has reached.
"""

from dataclasses import dataclass
from datetime import datetime

from talkbuddy.domain.common.entity import Entity
from talkbuddy.domain.common.exceptions import InvariantViolationError
from talkbuddy.domain.common.value_objects import AccuracyRate, AchievementId

ACCURACY_CRITERION = "accuracy"


def accuracy_title(rate: AccuracyRate) -> str:
    return f"Best accuracy {rate.as_percentage()}"


def accuracy_description(rate: AccuracyRate) -> str:
    return f"Answered {rate.as_percentage()} of recent problems correctly."


@dataclass
class Achievement(Entity[AchievementId]):
    """
    Best-accuracy achievement.

    Business Rules:
    - level is within [0, 1] and never decreases
    - title and description are regenerated from the level on every raise
    """

    id: AchievementId
    title: str
    description: str
    level: float
    criterion: str = ACCURACY_CRITERION
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        # Raises ValidationError when out of range
        AccuracyRate(self.level)

    def is_surpassed_by(self, rate: AccuracyRate) -> bool:
        return rate.value > self.level

    def raise_level(self, rate: AccuracyRate) -> None:
        """
        Raise the level to a strictly higher rate.

        Args:
            rate: The newly attained accuracy

        Raises:
            InvariantViolationError: If the rate does not exceed the current level
        """
        if not self.is_surpassed_by(rate):
            raise InvariantViolationError("Achievement", "level must never decrease")
        self.level = rate.value
        self.title = accuracy_title(rate)
        self.description = accuracy_description(rate)

    @classmethod
    def for_accuracy(cls, rate: AccuracyRate) -> "Achievement":
        """Create a new accuracy achievement (ID will be 0 until persisted)."""
        return cls(
            id=AchievementId.generate(),
            title=accuracy_title(rate),
            description=accuracy_description(rate),
            level=rate.value,
        )

    @classmethod
    def create_with_id(
        cls,
        id: AchievementId,
        title: str,
        description: str,
        level: float,
        criterion: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Achievement":
        """Reconstitute an achievement from persistence."""
        return cls(
            id=id,
            title=title,
            description=description,
            level=level,
            criterion=criterion,
            created_at=created_at,
            updated_at=updated_at,
        )
