"""Attempt entity: one graded submission for one problem."""

from dataclasses import dataclass
from datetime import datetime

from talkbuddy.domain.common.entity import Entity
from talkbuddy.domain.common.value_objects import AttemptId, ProblemId, UserId


@dataclass
class Attempt(Entity[AttemptId]):
    """
    Graded answer to a problem.

    Business Rules:
    - Created exactly once per successful grading call
    - is_correct stays None until the answer has been graded
    """

    id: AttemptId
    problem_id: ProblemId
    user_id: UserId
    is_correct: bool | None = None
    feedback: str | None = None
    voice_path: str | None = None
    created_at: datetime | None = None

    @classmethod
    def create(
        cls,
        problem_id: ProblemId,
        user_id: UserId,
        is_correct: bool | None,
        feedback: str | None,
        voice_path: str | None,
    ) -> "Attempt":
        """Create a new attempt (ID will be 0 until persisted)."""
        return cls(
            id=AttemptId.generate(),
            problem_id=problem_id,
            user_id=user_id,
            is_correct=is_correct,
            feedback=feedback,
            voice_path=voice_path,
        )

    @classmethod
    def create_with_id(
        cls,
        id: AttemptId,
        problem_id: ProblemId,
        user_id: UserId,
        is_correct: bool | None,
        feedback: str | None,
        voice_path: str | None,
        created_at: datetime,
    ) -> "Attempt":
        """Reconstitute an attempt from persistence."""
        return cls(
            id=id,
            problem_id=problem_id,
            user_id=user_id,
            is_correct=is_correct,
            feedback=feedback,
            voice_path=voice_path,
            created_at=created_at,
        )
