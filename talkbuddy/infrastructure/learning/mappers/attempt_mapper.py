"""Mapper for Attempt ORM ↔ Domain conversion."""

from talkbuddy.domain.common.value_objects import AttemptId, ProblemId, UserId
from talkbuddy.domain.learning.entities.attempt import Attempt
from talkbuddy.models import Attempt as AttemptORM


class AttemptMapper:
    """Mapper for Attempt ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: AttemptORM) -> Attempt:
        """Convert ORM model to domain entity."""
        return Attempt.create_with_id(
            id=AttemptId(orm_model.id),
            problem_id=ProblemId(orm_model.problem_id),
            user_id=UserId(orm_model.user_id),
            is_correct=orm_model.is_correct,
            feedback=orm_model.feedback,
            voice_path=orm_model.voice_path,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Attempt) -> AttemptORM:
        """Convert a new domain entity to ORM model (attempts are never updated)."""
        return AttemptORM(
            id=domain_entity.id.value if not domain_entity.id.is_transient else None,
            problem_id=domain_entity.problem_id.value,
            user_id=domain_entity.user_id.value,
            is_correct=domain_entity.is_correct,
            feedback=domain_entity.feedback,
            voice_path=domain_entity.voice_path,
        )
