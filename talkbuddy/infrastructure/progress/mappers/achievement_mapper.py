"""Mapper for Achievement ORM ↔ Domain conversion."""

from talkbuddy.domain.common.value_objects import AchievementId
from talkbuddy.domain.progress.entities.achievement import Achievement
from talkbuddy.models import Achievement as AchievementORM


class AchievementMapper:
    """Mapper for Achievement ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: AchievementORM) -> Achievement:
        """Convert ORM model to domain entity."""
        return Achievement.create_with_id(
            id=AchievementId(orm_model.id),
            title=orm_model.title,
            description=orm_model.description,
            level=orm_model.level,
            criterion=orm_model.criterion,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(self, domain_entity: Achievement) -> AchievementORM:
        """Convert a new domain entity to ORM model."""
        return AchievementORM(
            id=domain_entity.id.value if not domain_entity.id.is_transient else None,
            title=domain_entity.title,
            description=domain_entity.description,
            level=domain_entity.level,
            criterion=domain_entity.criterion,
        )
