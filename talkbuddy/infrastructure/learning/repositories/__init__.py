"""Learning module repositories."""

from talkbuddy.infrastructure.learning.repositories.attempt_repository import AttemptRepository
from talkbuddy.infrastructure.learning.repositories.problem_repository import ProblemRepository

__all__ = ["AttemptRepository", "ProblemRepository"]
