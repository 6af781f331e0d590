"""Mapper for User ORM ↔ Domain conversion."""

from talkbuddy.domain.common.value_objects.ids import UserId
from talkbuddy.domain.identity.entities.user import User
from talkbuddy.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            email=orm_model.email,
            birth_date=orm_model.birth_date,
            interests=orm_model.interests or [],
            created_at=orm_model.created_at,
        )
