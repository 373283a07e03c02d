"""Learning bounded context - topics and generated study material."""

from .entities.flashcard import Flashcard
from .entities.interview_set import InterviewQuestion, InterviewSet
from .entities.quiz import Quiz, QuizQuestion
from .entities.topic import Topic

__all__ = ["Flashcard", "InterviewQuestion", "InterviewSet", "Quiz", "QuizQuestion", "Topic"]
