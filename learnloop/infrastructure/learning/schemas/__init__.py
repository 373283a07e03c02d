"""Learning context schemas."""

from learnloop.infrastructure.learning.schemas.content_schemas import (
    ChatHistoryMessage,
    ChatRequestBody,
    ChatResponse,
    ExplainRequestBody,
    ExplanationResponse,
    FlashcardResponse,
    FlashcardsGenerateRequest,
    FlashcardsListResponse,
    InterviewGenerateRequest,
    InterviewQuestionSchema,
    InterviewSetResponse,
    QuizGenerateRequest,
    QuizQuestionSchema,
    QuizResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
)
from learnloop.infrastructure.learning.schemas.topic_schemas import (
    TopicCreateRequest,
    TopicCreateResponse,
    TopicResponse,
    TopicsListResponse,
)

__all__ = [
    "ChatHistoryMessage",
    "ChatRequestBody",
    "ChatResponse",
    "ExplainRequestBody",
    "ExplanationResponse",
    "FlashcardResponse",
    "FlashcardsGenerateRequest",
    "FlashcardsListResponse",
    "InterviewGenerateRequest",
    "InterviewQuestionSchema",
    "InterviewSetResponse",
    "QuizGenerateRequest",
    "QuizQuestionSchema",
    "QuizResponse",
    "QuizSubmitRequest",
    "QuizSubmitResponse",
    "TopicCreateRequest",
    "TopicCreateResponse",
    "TopicResponse",
    "TopicsListResponse",
]
