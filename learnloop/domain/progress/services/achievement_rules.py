"""
Domain service that detects achievement thresholds crossed by a progress update.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

AchievementMetric = Literal["xp", "streak"]


@dataclass(frozen=True)
class AchievementCriteria:
    """A metric threshold that unlocks an achievement."""

    metric: AchievementMetric
    threshold: int

    @property
    def key(self) -> str:
        """Stable key stored with the unlocked achievement (e.g. ``xp:100``)."""
        return f"{self.metric}:{self.threshold}"

    @property
    def title(self) -> str:
        if self.metric == "xp":
            return f"Earned {self.threshold} XP"
        return f"{self.threshold}-day streak"


class AchievementRules:
    """Threshold rules for XP and streak achievements."""

    def __init__(self, xp_thresholds: Iterable[int], streak_thresholds: Iterable[int]) -> None:
        self.xp_thresholds = sorted(set(xp_thresholds))
        self.streak_thresholds = sorted(set(streak_thresholds))

    def crossed_xp(self, before: int, after: int) -> list[AchievementCriteria]:
        """XP thresholds with ``before < threshold <= after``."""
        return _crossed("xp", self.xp_thresholds, before, after)

    def crossed_streak(self, before: int, after: int) -> list[AchievementCriteria]:
        """Streak thresholds reached by moving from ``before`` to ``after``."""
        return _crossed("streak", self.streak_thresholds, before, after)


def _crossed(
    metric: AchievementMetric, thresholds: list[int], before: int, after: int
) -> list[AchievementCriteria]:
    return [
        AchievementCriteria(metric=metric, threshold=threshold)
        for threshold in thresholds
        if before < threshold <= after
    ]
