"""Use case for grading a recorded answer."""

from typing import Any

import structlog

from talkbuddy.application.learning.protocols.attempt_repository import (
    AttemptRepositoryProtocol,
)
from talkbuddy.application.learning.protocols.inference_service import (
    InferenceServiceProtocol,
)
from talkbuddy.application.learning.protocols.problem_repository import (
    ProblemRepositoryProtocol,
)
from talkbuddy.application.progress.protocols.progress_update_dispatcher import (
    ProgressUpdateDispatcherProtocol,
)
from talkbuddy.domain.common.value_objects import ProblemId, UserId
from talkbuddy.domain.learning.entities.attempt import Attempt
from talkbuddy.exceptions import ProblemNotFoundError

logger = structlog.get_logger(__name__)


class GenerateFeedbackUseCase:
    """Submit a voice answer for grading and record the attempt."""

    def __init__(
        self,
        problem_repository: ProblemRepositoryProtocol,
        attempt_repository: AttemptRepositoryProtocol,
        inference_service: InferenceServiceProtocol,
        progress_dispatcher: ProgressUpdateDispatcherProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.problem_repository = problem_repository
        self.attempt_repository = attempt_repository
        self.inference_service = inference_service
        self.progress_dispatcher = progress_dispatcher

    async def generate_feedback(
        self, problem_id: str, user_id: int, voice: bytes, filename: str
    ) -> dict[str, Any]:
        """
        Grade a recorded answer to one of the user's problems.

        Ownership is checked before anything is sent upstream. Nothing is
        persisted and no progress update is dispatched unless grading
        succeeds.

        Args:
            problem_id: ID of the problem being answered
            user_id: ID of the answering user
            voice: Raw audio bytes of the recorded answer
            filename: Original filename of the recording

        Returns:
            The grading payload exactly as returned by the inference service

        Raises:
            ProblemNotFoundError: If the problem does not exist or is owned by another user
            UpstreamServiceError: If the inference service call fails
            StorageError: If the attempt cannot be persisted
        """
        problem_id_vo = ProblemId(problem_id)
        user_id_vo = UserId(user_id)

        problem = self.problem_repository.find_by_id(problem_id_vo, user_id_vo)
        if not problem:
            raise ProblemNotFoundError(problem_id)

        logger.info(
            "requesting_feedback",
            user_id=user_id,
            problem_id=problem_id,
            voice_size=len(voice),
        )
        graded = await self.inference_service.generate_feedback(
            problem_id=problem_id,
            answer=problem.answer,
            voice=voice,
            filename=filename,
        )

        attempt = self.attempt_repository.save(
            Attempt.create(
                problem_id=problem_id_vo,
                user_id=user_id_vo,
                is_correct=graded.is_correct,
                feedback=graded.feedback,
                voice_path=graded.voice_path,
            )
        )

        logger.info(
            "attempt_recorded",
            user_id=user_id,
            problem_id=problem_id,
            attempt_id=attempt.id.value,
            is_correct=attempt.is_correct,
        )

        await self.progress_dispatcher.dispatch(user_id_vo, graded.is_correct)

        return graded.raw
