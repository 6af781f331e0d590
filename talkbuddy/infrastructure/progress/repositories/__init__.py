"""Progress module repositories."""

from talkbuddy.infrastructure.progress.repositories.achievement_repository import (
    AchievementRepository,
)
from talkbuddy.infrastructure.progress.repositories.progress_repository import (
    ProgressRepository,
)

__all__ = ["AchievementRepository", "ProgressRepository"]
