from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class LearnerProfile:
    """Snapshot of a learner sent to the inference service."""

    age_months: int
    accuracy: float
    interests: str
    language_level: str
    language_goals: str | None
    feedback_history: list[str]


@dataclass(frozen=True)
class GeneratedProblem:
    id: str
    question: str
    answer: Any
    image: str | None
    image_path: str | None
    whole_text: str | None


@dataclass(frozen=True)
class GradedAnswer:
    is_correct: bool
    feedback: str
    voice_path: str | None
    raw: dict[str, Any]


class InferenceServiceProtocol(Protocol):
    async def generate_problem(self, profile: LearnerProfile) -> GeneratedProblem: ...

    async def generate_feedback(
        self, problem_id: str, answer: Any, voice: bytes, filename: str  # noqa: ANN401
    ) -> GradedAnswer: ...
