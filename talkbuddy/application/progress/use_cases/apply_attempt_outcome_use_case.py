"""Use case for the progress bookkeeping that follows a graded attempt."""

import structlog

from talkbuddy.application.learning.protocols.attempt_repository import (
    AttemptRepositoryProtocol,
)
from talkbuddy.application.progress.use_cases.evaluate_achievement_use_case import (
    EvaluateAchievementUseCase,
)
from talkbuddy.application.progress.use_cases.record_attempt_use_case import (
    RecordAttemptUseCase,
)
from talkbuddy.domain.common.value_objects import OutcomeCounts, UserId

logger = structlog.get_logger(__name__)


class ApplyAttemptOutcomeUseCase:
    """Update the progress bucket and, optionally, the accuracy achievement."""

    def __init__(
        self,
        record_attempt_use_case: RecordAttemptUseCase,
        evaluate_achievement_use_case: EvaluateAchievementUseCase,
        attempt_repository: AttemptRepositoryProtocol,
        evaluate_achievement: bool,
        history_limit: int | None,
    ) -> None:
        self.record_attempt_use_case = record_attempt_use_case
        self.evaluate_achievement_use_case = evaluate_achievement_use_case
        self.attempt_repository = attempt_repository
        self.evaluate_achievement = evaluate_achievement
        self.history_limit = history_limit

    def apply(self, user_id: int, is_correct: bool) -> None:
        """
        Apply the outcome of one graded attempt.

        Args:
            user_id: ID of the user
            is_correct: Outcome of the graded attempt
        """
        self.record_attempt_use_case.record_attempt(user_id, is_correct)

        if not self.evaluate_achievement:
            return

        attempts = self.attempt_repository.find_recent_by_user(
            UserId(user_id), limit=self.history_limit
        )
        accuracy = OutcomeCounts.from_outcomes(a.is_correct for a in attempts).accuracy
        logger.debug(
            "accuracy_recomputed",
            user_id=user_id,
            accuracy=accuracy.value,
            history_size=len(attempts),
        )
        self.evaluate_achievement_use_case.evaluate(user_id, accuracy.value)
