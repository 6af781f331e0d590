"""Repository for Problem domain entities."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talkbuddy.domain.common.value_objects.ids import ProblemId, UserId
from talkbuddy.domain.learning.entities.problem import Problem
from talkbuddy.exceptions import ProblemIdConflictError, StorageError
from talkbuddy.infrastructure.learning.mappers.problem_mapper import ProblemMapper
from talkbuddy.models import Problem as ProblemORM

logger = structlog.get_logger(__name__)


class ProblemRepository:
    """Repository for Problem domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ProblemMapper()

    def find_by_id(self, problem_id: ProblemId, user_id: UserId) -> Problem | None:
        """
        Find a problem by ID with user ownership check.

        Args:
            problem_id: The problem ID
            user_id: The user ID for ownership verification

        Returns:
            Problem entity if found and owned by user, None otherwise
        """
        stmt = select(ProblemORM).where(
            ProblemORM.id == problem_id.value,
            ProblemORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, problem: Problem) -> Problem:
        """
        Insert the problem, or overwrite the owner's row that already has its ID.

        Args:
            problem: The problem entity to save

        Returns:
            Saved problem entity with database-generated values

        Raises:
            ProblemIdConflictError: If the ID belongs to another user's problem
            StorageError: If the write fails
        """
        try:
            orm_model = self.db.get(ProblemORM, problem.id.value)
            if orm_model and orm_model.user_id != problem.user_id.value:
                logger.warning(
                    "problem_id_owned_by_another_user",
                    problem_id=problem.id.value,
                    user_id=problem.user_id.value,
                )
                raise ProblemIdConflictError(problem.id.value)
            if orm_model:
                logger.warning("overwriting_existing_problem", problem_id=problem.id.value)
                self.mapper.to_orm(problem, orm_model)
            else:
                orm_model = self.mapper.to_orm(problem)
                self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to save problem {problem.id.value}") from e
        return self.mapper.to_domain(orm_model)
