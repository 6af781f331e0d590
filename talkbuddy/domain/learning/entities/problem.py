"""
Problem entity: an exercise generated for a specific learner.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from talkbuddy.domain.common.entity import Entity
from talkbuddy.domain.common.exceptions import DomainError
from talkbuddy.domain.common.value_objects import ProblemId, UserId


@dataclass
class Problem(Entity[ProblemId]):
    """
    Problem generated by the inference service.

    Business Rules:
    - The id is assigned by the inference service, never by the database
    - Question cannot be empty
    - The expected answer is opaque JSON and stays on the server side
    """

    id: ProblemId
    user_id: UserId
    question: str
    answer: Any
    image_path: str | None = None
    whole_text: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.question or not self.question.strip():
            raise DomainError("Question cannot be empty")

    @classmethod
    def create(
        cls,
        id: ProblemId,
        user_id: UserId,
        question: str,
        answer: Any,  # noqa: ANN401
        image_path: str | None = None,
        whole_text: str | None = None,
    ) -> "Problem":
        """Create a problem from a freshly generated inference result."""
        return cls(
            id=id,
            user_id=user_id,
            question=question.strip(),
            answer=answer,
            image_path=image_path,
            whole_text=whole_text,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ProblemId,
        user_id: UserId,
        question: str,
        answer: Any,  # noqa: ANN401
        image_path: str | None,
        whole_text: str | None,
        created_at: datetime,
    ) -> "Problem":
        """Reconstitute a problem from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            question=question,
            answer=answer,
            image_path=image_path,
            whole_text=whole_text,
            created_at=created_at,
        )
