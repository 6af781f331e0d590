"""Repository for ProgressBucket domain entities."""

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from talkbuddy.domain.common.value_objects import ProgressBucketId, UserId
from talkbuddy.domain.progress.entities.progress_bucket import ProgressBucket
from talkbuddy.exceptions import StorageError
from talkbuddy.infrastructure.progress.mappers.progress_bucket_mapper import (
    ProgressBucketMapper,
)
from talkbuddy.models import ProgressBucket as ProgressBucketORM

logger = structlog.get_logger(__name__)


class ProgressRepository:
    """Repository for ProgressBucket domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ProgressBucketMapper()

    def find_latest_by_user(self, user_id: UserId) -> ProgressBucket | None:
        """
        Find the most recently created bucket of a user.

        Args:
            user_id: The user ID

        Returns:
            ProgressBucket entity if the user has any, None otherwise
        """
        stmt = (
            select(ProgressBucketORM)
            .where(ProgressBucketORM.user_id == user_id.value)
            .order_by(ProgressBucketORM.created_at.desc(), ProgressBucketORM.id.desc())
            .limit(1)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(self, user_id: UserId, limit: int) -> list[ProgressBucket]:
        """
        Get a user's buckets, newest day first.

        Args:
            user_id: The user ID
            limit: Maximum number of buckets

        Returns:
            List of progress bucket entities
        """
        stmt = (
            select(ProgressBucketORM)
            .where(ProgressBucketORM.user_id == user_id.value)
            .order_by(ProgressBucketORM.day.desc())
            .limit(limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def increment(self, bucket_id: ProgressBucketId, is_correct: bool) -> ProgressBucket:
        """
        Atomically add one attempt to a bucket.

        The counters are incremented in SQL so concurrent requests cannot
        overwrite each other's update.

        Args:
            bucket_id: The bucket to update in place
            is_correct: Whether the correct counter is bumped as well

        Returns:
            The updated bucket

        Raises:
            StorageError: If the write fails
        """
        stmt = (
            update(ProgressBucketORM)
            .where(ProgressBucketORM.id == bucket_id.value)
            .values(
                total_count=ProgressBucketORM.total_count + 1,
                correct_count=ProgressBucketORM.correct_count + (1 if is_correct else 0),
            )
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to update progress bucket {bucket_id.value}") from e
        return self._get(bucket_id.value)

    def open_bucket(self, bucket: ProgressBucket) -> ProgressBucket:
        """
        Insert a new bucket; if the user already has one for that day,
        overwrite its counts with the new bucket's counts.

        Args:
            bucket: Unsaved bucket entity

        Returns:
            The bucket stored for that user and day

        Raises:
            StorageError: If the write fails
        """
        orm_model = self.mapper.to_orm(bucket)
        try:
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)
        except IntegrityError:
            self.db.rollback()
            logger.info(
                "progress_bucket_conflict",
                user_id=bucket.user_id.value,
                day=bucket.day.isoformat(),
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(
                f"Failed to open progress bucket for user {bucket.user_id.value}"
            ) from e

        return self._overwrite_day(bucket)

    def _overwrite_day(self, bucket: ProgressBucket) -> ProgressBucket:
        stmt = (
            update(ProgressBucketORM)
            .where(
                ProgressBucketORM.user_id == bucket.user_id.value,
                ProgressBucketORM.day == bucket.day,
            )
            .values(correct_count=bucket.correct_count, total_count=bucket.total_count)
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(
                f"Failed to overwrite progress bucket for user {bucket.user_id.value}"
            ) from e
        stored = self.db.execute(
            select(ProgressBucketORM).where(
                ProgressBucketORM.user_id == bucket.user_id.value,
                ProgressBucketORM.day == bucket.day,
            )
        ).scalar_one()
        return self.mapper.to_domain(stored)

    def _get(self, bucket_id: int) -> ProgressBucket:
        orm_model = self.db.get(ProgressBucketORM, bucket_id, populate_existing=True)
        if not orm_model:
            raise StorageError(f"Progress bucket {bucket_id} not found")
        return self.mapper.to_domain(orm_model)
