from .achievement import Achievement
from .learning_session import ActivityType, LearningSession

__all__ = ["Achievement", "ActivityType", "LearningSession"]
