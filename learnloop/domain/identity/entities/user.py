"""User entity for identity and progress tracking."""

from dataclasses import dataclass
from datetime import date, datetime

from learnloop.domain.common.entity import Entity
from learnloop.domain.common.exceptions import ValidationError
from learnloop.domain.common.value_objects.ids import UserId
from learnloop.domain.progress.services.streak_policy import StreakState

# Domain constraints
MAX_DISPLAY_NAME_LENGTH = 100


@dataclass
class User(Entity[UserId]):
    """
    User entity representing a learner in the system.

    Business Rules:
    - XP and streak are never negative
    - XP and streak change only through the progress ledger
    - last_activity_date is the date of the most recent accepted activity
    """

    id: UserId
    display_name: str | None = None
    xp: int = 0
    streak: int = 0
    last_activity_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.xp < 0:
            raise ValidationError("XP cannot be negative", field="xp", value=self.xp)
        if self.streak < 0:
            raise ValidationError("Streak cannot be negative", field="streak", value=self.streak)
        _validate_display_name(self.display_name)

    @property
    def streak_state(self) -> StreakState:
        """Current streak as a value object."""
        return StreakState(streak=self.streak, last_activity_date=self.last_activity_date)

    def update_display_name(self, display_name: str | None) -> None:
        """
        Update the user's display name.

        Raises:
            ValidationError: If the name is too long
        """
        _validate_display_name(display_name)
        self.display_name = display_name.strip() if display_name else None

    @classmethod
    def create(cls, user_id: UserId, display_name: str | None = None) -> "User":
        """Create a new user with empty progress."""
        return cls(
            id=user_id,
            display_name=display_name.strip() if display_name else None,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        display_name: str | None,
        xp: int,
        streak: int,
        last_activity_date: date | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            display_name=display_name,
            xp=xp,
            streak=streak,
            last_activity_date=last_activity_date,
            created_at=created_at,
            updated_at=updated_at,
        )


def _validate_display_name(display_name: str | None) -> None:
    if display_name is not None and len(display_name) > MAX_DISPLAY_NAME_LENGTH:
        raise ValidationError(
            f"Display name cannot exceed {MAX_DISPLAY_NAME_LENGTH} characters",
            field="display_name",
        )
