"""Pydantic schemas for AI generated content and quiz submission."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from learnloop.domain.learning.entities.flashcard import Flashcard
from learnloop.domain.learning.entities.interview_set import InterviewSet
from learnloop.domain.learning.entities.quiz import Quiz
from learnloop.infrastructure.progress.schemas import ActivityProgress


class ExplainRequestBody(BaseModel):
    topic: str = Field(..., description="Topic to explain")
    difficulty: str = Field(..., description="beginner, intermediate or advanced")
    context: str | None = Field(None, description="What the learner already knows")


class ExplanationResponse(BaseModel):
    explanation: str
    examples: list[str]
    key_points: list[str]


class QuizGenerateRequest(BaseModel):
    topic: str = Field(..., description="Topic name used in the prompt and the quiz title")
    topic_id: int = Field(..., ge=1, description="Owned topic the quiz belongs to")
    question_count: int = Field(5, description="Number of questions, 1 to 20")


class QuizQuestionSchema(BaseModel):
    question: str
    options: list[str]
    correct_answer: int
    explanation: str


class QuizResponse(BaseModel):
    id: int
    topic_id: int
    title: str
    questions: list[QuizQuestionSchema]
    score: int | None
    submitted_at: datetime | None

    @classmethod
    def from_entity(cls, quiz: Quiz) -> "QuizResponse":
        return cls(
            id=quiz.id.value,
            topic_id=quiz.topic_id.value,
            title=quiz.title,
            questions=[QuizQuestionSchema(**q.to_dict()) for q in quiz.questions],
            score=quiz.score,
            submitted_at=quiz.submitted_at,
        )


class QuizSubmitRequest(BaseModel):
    answers: list[int] = Field(..., description="Selected option index per question")


class QuizSubmitResponse(BaseModel):
    quiz_id: int
    score: int
    total_questions: int
    progress: ActivityProgress


class FlashcardsGenerateRequest(BaseModel):
    topic: str
    topic_id: int = Field(..., ge=1)
    card_count: int = Field(10, description="Number of cards, 1 to 30")


class FlashcardResponse(BaseModel):
    id: int
    topic_id: int
    question: str
    answer: str

    @classmethod
    def from_entity(cls, flashcard: Flashcard) -> "FlashcardResponse":
        return cls(
            id=flashcard.id.value,
            topic_id=flashcard.topic_id.value,
            question=flashcard.question,
            answer=flashcard.answer,
        )


class FlashcardsListResponse(BaseModel):
    flashcards: list[FlashcardResponse]


class InterviewGenerateRequest(BaseModel):
    role: str = Field(..., description="Job role to prepare for")
    level: str = Field("intermediate", description="Seniority level")
    topic_id: int | None = Field(None, ge=1)


class InterviewQuestionSchema(BaseModel):
    question: str
    category: str
    sample_answer: str


class InterviewSetResponse(BaseModel):
    id: int
    role: str
    level: str
    topic_id: int | None
    questions: list[InterviewQuestionSchema]

    @classmethod
    def from_entity(cls, interview_set: InterviewSet) -> "InterviewSetResponse":
        return cls(
            id=interview_set.id.value,
            role=interview_set.role,
            level=interview_set.level,
            topic_id=interview_set.topic_id.value if interview_set.topic_id else None,
            questions=[InterviewQuestionSchema(**q.to_dict()) for q in interview_set.questions],
        )


class ChatHistoryMessage(BaseModel):
    role: Literal["user", "model"]
    text: str


class ChatRequestBody(BaseModel):
    prompt: str
    history: list[ChatHistoryMessage] = Field(default_factory=list)


class ChatResponse(BaseModel):
    reply: str
