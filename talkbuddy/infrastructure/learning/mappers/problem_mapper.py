"""Mapper for Problem ORM ↔ Domain conversion."""

from talkbuddy.domain.common.value_objects import ProblemId, UserId
from talkbuddy.domain.learning.entities.problem import Problem
from talkbuddy.models import Problem as ProblemORM


class ProblemMapper:
    """Mapper for Problem ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ProblemORM) -> Problem:
        """Convert ORM model to domain entity."""
        return Problem.create_with_id(
            id=ProblemId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            question=orm_model.question,
            answer=orm_model.answer,
            image_path=orm_model.image_path,
            whole_text=orm_model.whole_text,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Problem, orm_model: ProblemORM | None = None) -> ProblemORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing; ownership is fixed at creation
            orm_model.question = domain_entity.question
            orm_model.answer = domain_entity.answer
            orm_model.image_path = domain_entity.image_path
            orm_model.whole_text = domain_entity.whole_text
            return orm_model

        return ProblemORM(
            id=domain_entity.id.value,
            user_id=domain_entity.user_id.value,
            question=domain_entity.question,
            answer=domain_entity.answer,
            image_path=domain_entity.image_path,
            whole_text=domain_entity.whole_text,
        )
