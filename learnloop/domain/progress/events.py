"""Domain events raised by the progress ledger."""

from dataclasses import dataclass

from learnloop.domain.common.domain_event import DomainEvent
from learnloop.domain.common.value_objects import UserId


@dataclass(frozen=True, kw_only=True)
class XpThresholdCrossed(DomainEvent):
    """A user's XP total moved past an achievement threshold."""

    user_id: UserId
    threshold: int
    total: int


@dataclass(frozen=True, kw_only=True)
class StreakThresholdCrossed(DomainEvent):
    """A user's streak reached an achievement threshold."""

    user_id: UserId
    threshold: int
    streak: int
