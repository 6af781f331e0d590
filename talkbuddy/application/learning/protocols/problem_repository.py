"""Protocol for Problem repository in learning context."""

from typing import Protocol

from talkbuddy.domain.common.value_objects.ids import ProblemId, UserId
from talkbuddy.domain.learning.entities.problem import Problem


class ProblemRepositoryProtocol(Protocol):
    """Protocol for Problem repository operations in learning context."""

    def find_by_id(self, problem_id: ProblemId, user_id: UserId) -> Problem | None:
        """
        Find a problem by ID with user ownership check.

        Args:
            problem_id: The problem ID
            user_id: The user ID for ownership verification

        Returns:
            Problem entity if found and owned by user, None otherwise
        """
        ...

    def save(self, problem: Problem) -> Problem:
        """
        Insert the problem, or overwrite the row that already has its ID.

        Args:
            problem: The problem entity to save

        Returns:
            Saved problem entity with database-generated values
        """
        ...
