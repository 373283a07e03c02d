"""Achievement entity."""

from dataclasses import dataclass
from datetime import datetime

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.value_objects import AchievementId, UserId


@dataclass(frozen=True)
class Achievement(Entity[AchievementId]):
    """
    An achievement unlocked by a user.

    Unique per (user, criteria); unlocking twice is a no-op.
    """

    id: AchievementId
    user_id: UserId
    criteria: str
    title: str
    unlocked_at: datetime | None = None

    @classmethod
    def create_with_id(
        cls,
        id: AchievementId,
        user_id: UserId,
        criteria: str,
        title: str,
        unlocked_at: datetime,
    ) -> "Achievement":
        """Reconstitute an achievement from persistence."""
        return cls(id=id, user_id=user_id, criteria=criteria, title=title, unlocked_at=unlocked_at)
