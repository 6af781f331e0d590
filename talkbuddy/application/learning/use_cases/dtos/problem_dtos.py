"""DTOs for problem use cases."""

from dataclasses import dataclass


@dataclass
class ProblemSummary:
    """Client-facing view of a generated problem; never carries the expected answer."""

    problem_id: str
    question: str
    image: str | None
