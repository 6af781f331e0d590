"""Mapper for ProgressBucket ORM ↔ Domain conversion."""

from talkbuddy.domain.common.value_objects import ProgressBucketId, UserId
from talkbuddy.domain.progress.entities.progress_bucket import ProgressBucket
from talkbuddy.models import ProgressBucket as ProgressBucketORM


class ProgressBucketMapper:
    """Mapper for ProgressBucket ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ProgressBucketORM) -> ProgressBucket:
        """Convert ORM model to domain entity."""
        return ProgressBucket.create_with_id(
            id=ProgressBucketId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            day=orm_model.day,
            correct_count=orm_model.correct_count,
            total_count=orm_model.total_count,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: ProgressBucket) -> ProgressBucketORM:
        """Convert a new domain entity to ORM model."""
        return ProgressBucketORM(
            id=domain_entity.id.value if not domain_entity.id.is_transient else None,
            user_id=domain_entity.user_id.value,
            day=domain_entity.day,
            correct_count=domain_entity.correct_count,
            total_count=domain_entity.total_count,
        )
