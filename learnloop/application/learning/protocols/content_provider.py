"""
Content provider port.

One request type per content kind. Every response is a member of the
``GeneratedContent`` tagged union, keyed by ``kind``, and has already been
validated by the provider adapter.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Protocol

ContentKind = Literal["explain", "quiz", "flashcards", "interview", "chat"]


@dataclass(frozen=True)
class ExplanationRequest:
    kind: ClassVar[ContentKind] = "explain"

    topic: str
    difficulty: str
    context: str | None = None


@dataclass(frozen=True)
class QuizRequest:
    kind: ClassVar[ContentKind] = "quiz"

    topic: str
    question_count: int = 5


@dataclass(frozen=True)
class FlashcardsRequest:
    kind: ClassVar[ContentKind] = "flashcards"

    topic: str
    card_count: int = 10


@dataclass(frozen=True)
class InterviewRequest:
    kind: ClassVar[ContentKind] = "interview"

    role: str
    level: str = "intermediate"


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["user", "model"]
    text: str


@dataclass(frozen=True)
class ChatRequest:
    kind: ClassVar[ContentKind] = "chat"

    prompt: str
    history: tuple[ChatMessage, ...] = ()


ContentRequest = (
    ExplanationRequest | QuizRequest | FlashcardsRequest | InterviewRequest | ChatRequest
)


@dataclass(frozen=True)
class Explanation:
    kind: ClassVar[ContentKind] = "explain"

    explanation: str
    examples: list[str] = field(default_factory=list)
    key_points: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GeneratedQuizQuestion:
    question: str
    options: list[str]
    correct_answer: int
    explanation: str = ""


@dataclass(frozen=True)
class QuizContent:
    kind: ClassVar[ContentKind] = "quiz"

    questions: list[GeneratedQuizQuestion]


@dataclass(frozen=True)
class GeneratedFlashcard:
    question: str
    answer: str


@dataclass(frozen=True)
class FlashcardDeck:
    kind: ClassVar[ContentKind] = "flashcards"

    cards: list[GeneratedFlashcard]


@dataclass(frozen=True)
class GeneratedInterviewQuestion:
    question: str
    category: str
    sample_answer: str


@dataclass(frozen=True)
class InterviewContent:
    kind: ClassVar[ContentKind] = "interview"

    questions: list[GeneratedInterviewQuestion]


@dataclass(frozen=True)
class ChatReply:
    kind: ClassVar[ContentKind] = "chat"

    reply: str


GeneratedContent = Explanation | QuizContent | FlashcardDeck | InterviewContent | ChatReply


class ContentProviderProtocol(Protocol):
    async def generate(self, request: ContentRequest) -> GeneratedContent:
        """
        Generate content for a request.

        Raises:
            ProviderError: If the provider failed, timed out on every attempt, or
                returned output that does not match the requested kind
        """
        ...
