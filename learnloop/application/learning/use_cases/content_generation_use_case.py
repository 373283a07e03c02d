"""Use case for AI generated study content."""

from collections.abc import Sequence
from typing import TypeVar

import structlog

from learnloop.application.common.unit_of_work import UnitOfWork
from learnloop.application.learning.protocols.content_provider import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ContentProviderProtocol,
    ContentRequest,
    Explanation,
    ExplanationRequest,
    FlashcardDeck,
    FlashcardsRequest,
    GeneratedContent,
    InterviewContent,
    InterviewRequest,
    QuizContent,
    QuizRequest,
)
from learnloop.application.learning.protocols.study_material_repository import (
    StudyMaterialRepositoryProtocol,
)
from learnloop.application.learning.protocols.topic_repository import TopicRepositoryProtocol
from learnloop.domain.common.value_objects.ids import TopicId, UserId
from learnloop.domain.learning.entities.flashcard import Flashcard
from learnloop.domain.learning.entities.interview_set import InterviewQuestion, InterviewSet
from learnloop.domain.learning.entities.quiz import Quiz, QuizQuestion
from learnloop.exceptions import ProviderError, TopicNotFoundError, ValidationError

logger = structlog.get_logger(__name__)

MAX_QUIZ_QUESTIONS = 20
MAX_FLASHCARDS = 30

ContentT = TypeVar("ContentT", Explanation, QuizContent, FlashcardDeck, InterviewContent, ChatReply)


def _require_text(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{name} is required")
    return value.strip()


def _require_count(value: int, name: str, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= maximum:
        raise ValidationError(f"{name} must be between 1 and {maximum}")
    return value


class ContentGenerationUseCase:
    """
    Use case for explanations, quizzes, flashcards, interview questions and chat.

    Every request is validated before the provider is called, so a rejected
    request never costs a provider round trip. Generated material is stored
    only after the provider returned a complete, valid response.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        content_provider: ContentProviderProtocol,
        topic_repository: TopicRepositoryProtocol,
        material_repository: StudyMaterialRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols and the content provider."""
        self.uow = uow
        self.content_provider = content_provider
        self.topic_repository = topic_repository
        self.material_repository = material_repository

    async def explain(
        self, topic: str, difficulty: str, context: str | None = None
    ) -> Explanation:
        """
        Explain a topic at the given difficulty.

        Raises:
            ValidationError: If topic or difficulty is missing
            ProviderError: If the content provider failed
        """
        request = ExplanationRequest(
            topic=_require_text(topic, "Topic"),
            difficulty=_require_text(difficulty, "Difficulty"),
            context=context.strip() if context else None,
        )
        return await self._generate(request, Explanation)

    async def generate_quiz(
        self, user_id: str, topic_id: int, topic: str, question_count: int = 5
    ) -> Quiz:
        """
        Generate a quiz for a topic and store it.

        Raises:
            ValidationError: If the topic name or question count is invalid
            TopicNotFoundError: If the topic does not exist or is not owned by the user
            ProviderError: If the content provider failed
        """
        user_id_vo = UserId(user_id)
        topic_id_vo = self._require_topic(topic_id, user_id_vo)
        request = QuizRequest(
            topic=_require_text(topic, "Topic"),
            question_count=_require_count(question_count, "Question count", MAX_QUIZ_QUESTIONS),
        )

        content = await self._generate(request, QuizContent)
        questions = [
            QuizQuestion(
                question=q.question,
                options=tuple(q.options),
                correct_answer=q.correct_answer,
                explanation=q.explanation,
            )
            for q in content.questions
        ]

        with self.uow:
            quiz = self.material_repository.add_quiz(
                Quiz.create(
                    user_id=user_id_vo,
                    topic_id=topic_id_vo,
                    title=f"{request.topic} Quiz",
                    questions=questions,
                )
            )
            self.uow.commit()

        logger.info("quiz_generated", quiz_id=quiz.id.value, question_count=len(questions))
        return quiz

    async def generate_flashcards(
        self, user_id: str, topic_id: int, topic: str, card_count: int = 10
    ) -> list[Flashcard]:
        """
        Generate a flashcard deck for a topic and store the whole deck at once.

        Raises:
            ValidationError: If the topic name or card count is invalid
            TopicNotFoundError: If the topic does not exist or is not owned by the user
            ProviderError: If the content provider failed
        """
        user_id_vo = UserId(user_id)
        topic_id_vo = self._require_topic(topic_id, user_id_vo)
        request = FlashcardsRequest(
            topic=_require_text(topic, "Topic"),
            card_count=_require_count(card_count, "Card count", MAX_FLASHCARDS),
        )

        deck = await self._generate(request, FlashcardDeck)
        flashcards = [
            Flashcard.create(
                user_id=user_id_vo, topic_id=topic_id_vo, question=c.question, answer=c.answer
            )
            for c in deck.cards
        ]

        with self.uow:
            saved = self.material_repository.add_flashcards(flashcards)
            self.uow.commit()

        logger.info("flashcards_generated", topic_id=topic_id, count=len(saved))
        return saved

    async def generate_interview(
        self,
        user_id: str,
        role: str,
        level: str = "intermediate",
        topic_id: int | None = None,
    ) -> InterviewSet:
        """
        Generate interview questions for a role and store them.

        Raises:
            ValidationError: If role or level is missing
            TopicNotFoundError: If a topic id was given but is not owned by the user
            ProviderError: If the content provider failed
        """
        user_id_vo = UserId(user_id)
        topic_id_vo = self._require_topic(topic_id, user_id_vo) if topic_id is not None else None
        request = InterviewRequest(
            role=_require_text(role, "Role"), level=_require_text(level, "Level")
        )

        content = await self._generate(request, InterviewContent)
        questions = [
            InterviewQuestion(
                question=q.question, category=q.category, sample_answer=q.sample_answer
            )
            for q in content.questions
        ]

        with self.uow:
            interview_set = self.material_repository.add_interview_set(
                InterviewSet.create(
                    user_id=user_id_vo,
                    role=request.role,
                    level=request.level,
                    questions=questions,
                    topic_id=topic_id_vo,
                )
            )
            self.uow.commit()

        logger.info(
            "interview_set_generated",
            interview_set_id=interview_set.id.value,
            question_count=len(questions),
        )
        return interview_set

    async def chat(self, prompt: str, history: Sequence[ChatMessage] = ()) -> ChatReply:
        """
        Answer a conversational prompt.

        Raises:
            ValidationError: If the prompt is missing
            ProviderError: If the content provider failed
        """
        request = ChatRequest(prompt=_require_text(prompt, "Prompt"), history=tuple(history))
        return await self._generate(request, ChatReply)

    def _require_topic(self, topic_id: int, user_id: UserId) -> TopicId:
        topic_id_vo = TopicId(topic_id)
        if self.topic_repository.find_by_id(topic_id_vo, user_id) is None:
            raise TopicNotFoundError(topic_id)
        return topic_id_vo

    async def _generate(self, request: ContentRequest, expected: type[ContentT]) -> ContentT:
        content: GeneratedContent = await self.content_provider.generate(request)
        if not isinstance(content, expected):
            raise ProviderError(
                f"Content provider returned {content.kind!r} for a {request.kind!r} request",
                kind=request.kind,
            )
        return content
