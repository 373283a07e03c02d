"""
Domain service deciding how a learning activity moves a user's daily streak.

This is a pure domain service with no infrastructure dependencies.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from learnloop.domain.common.value_object import ValueObject


@dataclass(frozen=True)
class StreakState(ValueObject):
    """Streak length together with the day it was last extended."""

    streak: int
    last_activity_date: date | None

    def __post_init__(self) -> None:
        if self.streak < 0:
            raise ValueError("Streak cannot be negative")


class StreakPolicy:
    """
    Calendar-day streak rules.

    - First activity ever starts a streak of 1
    - Another activity on the same day changes nothing
    - Activity on the following day extends the streak by 1
    - Activity after a gap of more than one day restarts the streak at 1
    - Activity dated before the last accepted one is ignored
    """

    def next_state(self, current: StreakState, activity_date: date) -> StreakState | None:
        """
        Compute the state after an activity on ``activity_date``.

        Returns:
            The new state, or None when the activity leaves the streak untouched
        """
        last = current.last_activity_date
        if last is None:
            return StreakState(streak=1, last_activity_date=activity_date)
        if activity_date <= last:
            # Same day, or an out-of-order delivery that must not regress state
            return None
        if activity_date == last + timedelta(days=1):
            return StreakState(streak=current.streak + 1, last_activity_date=activity_date)
        return StreakState(streak=1, last_activity_date=activity_date)
