"""Use case for generating a personalized problem."""

from datetime import UTC, tzinfo
from typing import Literal

import structlog

from talkbuddy.application.identity.protocols.user_repository import UserRepositoryProtocol
from talkbuddy.application.learning.protocols.attempt_repository import (
    AttemptRepositoryProtocol,
)
from talkbuddy.application.learning.protocols.inference_service import (
    InferenceServiceProtocol,
    LearnerProfile,
)
from talkbuddy.application.learning.protocols.problem_repository import (
    ProblemRepositoryProtocol,
)
from talkbuddy.application.learning.use_cases.dtos import ProblemSummary
from talkbuddy.application.progress.use_cases.evaluate_achievement_use_case import (
    EvaluateAchievementUseCase,
)
from talkbuddy.domain.common.value_objects import OutcomeCounts, ProblemId, UserId
from talkbuddy.domain.learning.entities.problem import Problem
from talkbuddy.exceptions import UserNotFoundError
from talkbuddy.utils import Clock, calendar_day, utc_now

logger = structlog.get_logger(__name__)

AchievementEvaluationMode = Literal["problem", "feedback", "disabled"]


class GenerateProblemUseCase:
    """Build a learner profile, request a problem for it and store the result."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        attempt_repository: AttemptRepositoryProtocol,
        problem_repository: ProblemRepositoryProtocol,
        inference_service: InferenceServiceProtocol,
        evaluate_achievement_use_case: EvaluateAchievementUseCase,
        achievement_evaluation_mode: AchievementEvaluationMode,
        history_limit: int | None,
        language_level: str,
        timezone: tzinfo = UTC,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.attempt_repository = attempt_repository
        self.problem_repository = problem_repository
        self.inference_service = inference_service
        self.evaluate_achievement_use_case = evaluate_achievement_use_case
        self.achievement_evaluation_mode = achievement_evaluation_mode
        self.history_limit = history_limit
        self.language_level = language_level
        self.timezone = timezone
        self.clock = clock

    async def generate_problem(self, user_id: int) -> ProblemSummary:
        """
        Generate a new problem tailored to the user.

        The profile sent upstream carries the user's age in months, accuracy
        over the configured attempt history (0 with no attempts), interests,
        a language level tier and the feedback texts of that history.

        Args:
            user_id: ID of the user

        Returns:
            Problem id, question and image reference (no expected answer)

        Raises:
            UserNotFoundError: If the user does not exist
            UpstreamServiceError: If the inference service call fails, or returns
                the id of a problem owned by another user
        """
        user_id_vo = UserId(user_id)

        user = self.user_repository.find_by_id(user_id_vo)
        if not user:
            raise UserNotFoundError(user_id)

        attempts = self.attempt_repository.find_recent_by_user(
            user_id_vo, limit=self.history_limit
        )
        accuracy = OutcomeCounts.from_outcomes(a.is_correct for a in attempts).accuracy

        if self.achievement_evaluation_mode == "problem":
            self.evaluate_achievement_use_case.evaluate(user_id, accuracy.value)

        profile = LearnerProfile(
            age_months=user.age_in_months(calendar_day(self.clock(), self.timezone)),
            accuracy=accuracy.value,
            interests=user.interests_as_text(),
            language_level=self.language_level,
            language_goals=None,
            feedback_history=[a.feedback for a in attempts if a.feedback],
        )

        logger.info(
            "requesting_problem",
            user_id=user_id,
            age_months=profile.age_months,
            accuracy=profile.accuracy,
            history_size=len(attempts),
        )
        generated = await self.inference_service.generate_problem(profile)

        problem = self.problem_repository.save(
            Problem.create(
                id=ProblemId(generated.id),
                user_id=user_id_vo,
                question=generated.question,
                answer=generated.answer,
                image_path=generated.image_path,
                whole_text=generated.whole_text,
            )
        )

        logger.info("problem_generated", user_id=user_id, problem_id=problem.id.value)

        return ProblemSummary(
            problem_id=problem.id.value,
            question=problem.question,
            image=generated.image,
        )
