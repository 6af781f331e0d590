"""Read-side queries over progress buckets and achievements."""

from talkbuddy.application.progress.protocols.achievement_repository import (
    AchievementRepositoryProtocol,
)
from talkbuddy.application.progress.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from talkbuddy.domain.common.value_objects import UserId
from talkbuddy.domain.progress.entities.achievement import ACCURACY_CRITERION, Achievement
from talkbuddy.domain.progress.entities.progress_bucket import ProgressBucket


class ProgressQueryUseCase:
    """Query a user's progress history and accuracy achievement."""

    def __init__(
        self,
        progress_repository: ProgressRepositoryProtocol,
        achievement_repository: AchievementRepositoryProtocol,
    ) -> None:
        self.progress_repository = progress_repository
        self.achievement_repository = achievement_repository

    def get_buckets(self, user_id: int, limit: int = 30) -> list[ProgressBucket]:
        return self.progress_repository.find_by_user(UserId(user_id), limit)

    def get_accuracy_achievement(self, user_id: int) -> Achievement | None:
        return self.achievement_repository.find_top_by_user(UserId(user_id), ACCURACY_CRITERION)
