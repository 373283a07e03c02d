"""Mapper for User ORM ↔ Domain conversion."""

from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.identity.entities.user import User
from learnloop.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            display_name=orm_model.display_name,
            xp=orm_model.xp,
            streak=orm_model.streak,
            last_activity_date=orm_model.last_activity_date,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )
