"""Progress domain services (pure logic, no infrastructure)."""

from .achievement_rules import AchievementCriteria, AchievementRules
from .streak_policy import StreakPolicy, StreakState

__all__ = ["AchievementCriteria", "AchievementRules", "StreakPolicy", "StreakState"]
