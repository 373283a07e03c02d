from .achievement_repository import AchievementRepositoryProtocol
from .learning_session_repository import LearningSessionRepositoryProtocol

__all__ = ["AchievementRepositoryProtocol", "LearningSessionRepositoryProtocol"]
