"""Repository for Attempt domain entities."""

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talkbuddy.domain.common.value_objects import OutcomeCounts
from talkbuddy.domain.common.value_objects.ids import UserId
from talkbuddy.domain.learning.entities.attempt import Attempt
from talkbuddy.exceptions import StorageError
from talkbuddy.infrastructure.learning.mappers.attempt_mapper import AttemptMapper
from talkbuddy.models import Attempt as AttemptORM


class AttemptRepository:
    """Repository for Attempt domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = AttemptMapper()

    def find_recent_by_user(self, user_id: UserId, limit: int | None = None) -> list[Attempt]:
        """
        Get a user's attempts, newest first.

        Args:
            user_id: The user ID
            limit: Maximum number of attempts, None for the full history

        Returns:
            List of attempt entities ordered by created_at DESC
        """
        stmt = (
            select(AttemptORM)
            .where(AttemptORM.user_id == user_id.value)
            .order_by(AttemptORM.created_at.desc(), AttemptORM.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def count_outcomes(self, user_id: UserId) -> OutcomeCounts:
        """
        Aggregate correct/total counts over all of a user's attempts.

        Args:
            user_id: The user ID

        Returns:
            Lifetime outcome counts
        """
        stmt = select(
            func.count(AttemptORM.id),
            func.coalesce(func.sum(case((AttemptORM.is_correct.is_(True), 1), else_=0)), 0),
        ).where(AttemptORM.user_id == user_id.value)
        total, correct = self.db.execute(stmt).one()
        return OutcomeCounts(correct=int(correct), total=int(total))

    def save(self, attempt: Attempt) -> Attempt:
        """
        Persist a new attempt.

        Args:
            attempt: The attempt entity to save

        Returns:
            Saved attempt entity with database-generated values

        Raises:
            StorageError: If the write fails
        """
        orm_model = self.mapper.to_orm(attempt)
        try:
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(
                f"Failed to save attempt for problem {attempt.problem_id.value}"
            ) from e
        return self.mapper.to_domain(orm_model)
