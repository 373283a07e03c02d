"""pydantic-ai backed implementation of the content provider port."""

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel

from learnloop.application.learning.protocols.content_provider import (
    ChatReply,
    ChatRequest,
    ContentKind,
    ContentRequest,
    Explanation,
    ExplanationRequest,
    FlashcardDeck,
    FlashcardsRequest,
    GeneratedContent,
    GeneratedFlashcard,
    GeneratedInterviewQuestion,
    GeneratedQuizQuestion,
    InterviewContent,
    InterviewRequest,
    QuizContent,
    QuizRequest,
)
from learnloop.exceptions import ProviderError
from learnloop.infrastructure.ai.ai_agents import (
    ChatOutput,
    ContentOutput,
    ExplanationOutput,
    FlashcardDeckOutput,
    InterviewOutput,
    QuizOutput,
    content_output_adapter,
    get_chat_agent,
    get_explanation_agent,
    get_flashcard_agent,
    get_interview_agent,
    get_quiz_agent,
)

logger = structlog.get_logger(__name__)

AgentFactory = Callable[[], Any]

DEFAULT_AGENTS: Mapping[ContentKind, AgentFactory] = {
    "explain": get_explanation_agent,
    "quiz": get_quiz_agent,
    "flashcards": get_flashcard_agent,
    "interview": get_interview_agent,
    "chat": get_chat_agent,
}


def build_prompt(request: ContentRequest) -> str:
    """Render a content request as the user prompt for its agent."""
    if isinstance(request, ExplanationRequest):
        prompt = f"Topic: {request.topic}\nDifficulty: {request.difficulty}"
        if request.context:
            prompt += f"\nContext: {request.context}"
        return prompt
    if isinstance(request, QuizRequest):
        return f"Topic: {request.topic}\nNumber of questions: {request.question_count}"
    if isinstance(request, FlashcardsRequest):
        return f"Topic: {request.topic}\nNumber of cards: {request.card_count}"
    if isinstance(request, InterviewRequest):
        return f"Role: {request.role}\nLevel: {request.level}"
    lines = [f"{m.role}: {m.text}" for m in request.history]
    if lines:
        return "Conversation so far:\n" + "\n".join(lines) + f"\n\nuser: {request.prompt}"
    return request.prompt


def to_content(output: ContentOutput) -> GeneratedContent:
    """Convert validated agent output into the application's content union."""
    if isinstance(output, ExplanationOutput):
        return Explanation(
            explanation=output.explanation,
            examples=list(output.examples),
            key_points=list(output.key_points),
        )
    if isinstance(output, QuizOutput):
        return QuizContent(
            questions=[
                GeneratedQuizQuestion(
                    question=q.question,
                    options=list(q.options),
                    correct_answer=q.correct_answer,
                    explanation=q.explanation,
                )
                for q in output.questions
            ]
        )
    if isinstance(output, FlashcardDeckOutput):
        return FlashcardDeck(
            cards=[GeneratedFlashcard(question=c.question, answer=c.answer) for c in output.cards]
        )
    if isinstance(output, InterviewOutput):
        return InterviewContent(
            questions=[
                GeneratedInterviewQuestion(
                    question=q.question, category=q.category, sample_answer=q.sample_answer
                )
                for q in output.questions
            ]
        )
    return ChatReply(reply=output.reply)


def _payload(raw: object, kind: ContentKind) -> object:
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, str) and kind == "chat":
        return ChatOutput(reply=raw).model_dump()
    return raw


class AIContentProvider:
    """
    Content provider backed by pydantic-ai agents.

    Each attempt is bounded by ``timeout_seconds``; a failed or timed out
    attempt is retried until ``max_attempts`` is reached. Output is validated
    against the tagged content union before it leaves this class.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        max_attempts: int = 2,
        agents: Mapping[ContentKind, AgentFactory] | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.agents = agents if agents is not None else DEFAULT_AGENTS

    async def generate(self, request: ContentRequest) -> GeneratedContent:
        agent = self.agents[request.kind]()
        prompt = build_prompt(request)

        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = await asyncio.wait_for(agent.run(prompt), timeout=self.timeout_seconds)
                output = content_output_adapter.validate_python(
                    _payload(result.output, request.kind)
                )
                if output.kind != request.kind:
                    msg = f"expected {request.kind!r} output, got {output.kind!r}"
                    raise ValueError(msg)
                return to_content(output)
            except TimeoutError as e:
                last_error = e
                logger.warning(
                    "content_provider_attempt_failed",
                    kind=request.kind,
                    attempt=attempt,
                    error="timeout",
                    timeout_seconds=self.timeout_seconds,
                )
            except Exception as e:
                last_error = e
                logger.warning(
                    "content_provider_attempt_failed",
                    kind=request.kind,
                    attempt=attempt,
                    error=str(e),
                    exc_info=True,
                )

        logger.error(
            "content_provider_failed",
            kind=request.kind,
            attempts=self.max_attempts,
            error=str(last_error),
        )
        if isinstance(last_error, TimeoutError):
            message = f"Content provider timed out after {self.max_attempts} attempts"
        else:
            message = f"Content provider failed after {self.max_attempts} attempts"
        raise ProviderError(message, kind=request.kind) from last_error
