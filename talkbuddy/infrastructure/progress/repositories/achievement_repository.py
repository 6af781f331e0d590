"""Repository for Achievement domain entities."""

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from talkbuddy.domain.common.value_objects import AchievementId, UserId
from talkbuddy.domain.progress.entities.achievement import Achievement
from talkbuddy.exceptions import StorageError
from talkbuddy.infrastructure.progress.mappers.achievement_mapper import AchievementMapper
from talkbuddy.models import Achievement as AchievementORM
from talkbuddy.models import UserAchievement as UserAchievementORM


class AchievementRepository:
    """Repository for Achievement domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = AchievementMapper()

    def find_top_by_user(self, user_id: UserId, criterion: str) -> Achievement | None:
        """
        Find the user's highest-level achievement for a criterion.

        Args:
            user_id: The user ID
            criterion: Achievement criterion, e.g. "accuracy"

        Returns:
            Achievement entity if the user earned one, None otherwise
        """
        stmt = (
            select(AchievementORM)
            .join(UserAchievementORM, UserAchievementORM.achievement_id == AchievementORM.id)
            .where(
                UserAchievementORM.user_id == user_id.value,
                UserAchievementORM.criterion == criterion,
            )
            .order_by(AchievementORM.level.desc())
            .limit(1)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def create_for_user(self, user_id: UserId, achievement: Achievement) -> Achievement | None:
        """
        Insert an achievement together with the user's link to it.

        Args:
            user_id: The user earning the achievement
            achievement: Unsaved achievement entity

        Returns:
            The saved achievement, or None if the user already holds one for
            this criterion

        Raises:
            StorageError: If the write fails for any other reason
        """
        orm_model = self.mapper.to_orm(achievement)
        try:
            self.db.add(orm_model)
            self.db.flush()
            self.db.add(
                UserAchievementORM(
                    user_id=user_id.value,
                    achievement_id=orm_model.id,
                    criterion=achievement.criterion,
                )
            )
            self.db.commit()
            self.db.refresh(orm_model)
        except IntegrityError:
            self.db.rollback()
            return None
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to create achievement for user {user_id.value}") from e
        return self.mapper.to_domain(orm_model)

    def raise_level(self, achievement: Achievement) -> bool:
        """
        Compare-and-set update of level, title and description.

        Args:
            achievement: Achievement carrying the new level and texts

        Returns:
            True if the row was updated, False if a higher or equal level was
            already stored

        Raises:
            StorageError: If the write fails
        """
        stmt = (
            update(AchievementORM)
            .where(
                AchievementORM.id == achievement.id.value,
                AchievementORM.level < achievement.level,
            )
            .values(
                level=achievement.level,
                title=achievement.title,
                description=achievement.description,
                updated_at=func.now(),
            )
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to update achievement {achievement.id.value}") from e
        return result.rowcount == 1

    def get(self, achievement_id: AchievementId) -> Achievement:
        """Load an achievement by ID."""
        orm_model = self.db.get(AchievementORM, achievement_id.value, populate_existing=True)
        if not orm_model:
            raise StorageError(f"Achievement {achievement_id.value} not found")
        return self.mapper.to_domain(orm_model)
