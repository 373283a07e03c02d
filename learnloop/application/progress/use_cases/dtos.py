"""DTOs for progress ledger use cases."""

from dataclasses import dataclass, field

from learnloop.domain.common.domain_event import DomainEvent
from learnloop.domain.progress.entities.learning_session import LearningSession
from learnloop.domain.progress.services.achievement_rules import AchievementCriteria
from learnloop.domain.progress.services.streak_policy import StreakState


@dataclass(frozen=True)
class XpAward:
    """Outcome of one atomic XP increment."""

    total: int
    unlocked: list[AchievementCriteria] = field(default_factory=list)
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class StreakUpdate:
    """Outcome of one streak update; ``changed`` is False for no-op activity days."""

    state: StreakState
    changed: bool
    unlocked: list[AchievementCriteria] = field(default_factory=list)
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class ActivityResult:
    """A recorded learning session together with the progress it produced."""

    session: LearningSession
    xp: int
    streak: StreakState
    unlocked: list[AchievementCriteria] = field(default_factory=list)
    events: list[DomainEvent] = field(default_factory=list)


@dataclass(frozen=True)
class SessionAuditEntry:
    """A learning session and whether its XP reached the user's total."""

    session: LearningSession
    xp_applied: bool
