"""Tests for the pydantic-ai backed content provider."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from learnloop.application.learning.protocols.content_provider import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ExplanationRequest,
    FlashcardDeck,
    FlashcardsRequest,
    QuizContent,
    QuizRequest,
)
from learnloop.exceptions import ProviderError
from learnloop.infrastructure.ai.ai_agents import (
    ExplanationOutput,
    FlashcardDeckOutput,
    FlashcardOutput,
)
from learnloop.infrastructure.ai.ai_service import AIContentProvider, build_prompt


@dataclass
class FakeRunResult:
    output: Any


class FakeAgent:
    """Stands in for a pydantic-ai Agent; each call pops the next scripted behaviour."""

    def __init__(self, *outputs: Any, delay: float = 0.0) -> None:
        self.outputs = list(outputs)
        self.delay = delay
        self.prompts: list[str] = []

    async def run(self, prompt: str) -> FakeRunResult:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        output = self.outputs.pop(0)
        if isinstance(output, Exception):
            raise output
        return FakeRunResult(output=output)


def provider_for(kind: str, agent: FakeAgent, **kwargs: Any) -> AIContentProvider:
    factory: Callable[[], FakeAgent] = lambda: agent  # noqa: E731
    return AIContentProvider(agents={kind: factory}, **kwargs)  # type: ignore[dict-item]


class TestAIContentProvider:
    async def test_valid_output_is_converted(self) -> None:
        agent = FakeAgent(
            FlashcardDeckOutput(cards=[FlashcardOutput(question="What is ATP?", answer="Energy")])
        )
        provider = provider_for("flashcards", agent)

        content = await provider.generate(FlashcardsRequest(topic="Cells", card_count=1))

        assert isinstance(content, FlashcardDeck)
        assert content.cards[0].question == "What is ATP?"
        assert agent.prompts == ["Topic: Cells\nNumber of cards: 1"]

    async def test_plain_dict_output_is_validated(self) -> None:
        agent = FakeAgent(
            {
                "kind": "quiz",
                "questions": [
                    {"question": "1 + 1?", "options": ["1", "2"], "correct_answer": 1},
                ],
            }
        )
        provider = provider_for("quiz", agent)

        content = await provider.generate(QuizRequest(topic="Math", question_count=1))

        assert isinstance(content, QuizContent)
        assert content.questions[0].correct_answer == 1

    async def test_chat_text_output(self) -> None:
        provider = provider_for("chat", FakeAgent("Hi there"))

        content = await provider.generate(ChatRequest(prompt="Hello"))

        assert content == ChatReply(reply="Hi there")

    async def test_failed_attempt_is_retried(self) -> None:
        agent = FakeAgent(RuntimeError("upstream 500"), ExplanationOutput(explanation="Done"))
        provider = provider_for("explain", agent, max_attempts=2)

        content = await provider.generate(ExplanationRequest(topic="X", difficulty="advanced"))

        assert content.explanation == "Done"  # type: ignore[union-attr]
        assert len(agent.prompts) == 2

    async def test_timeout_on_every_attempt(self) -> None:
        agent = FakeAgent(ExplanationOutput(explanation="late"), ExplanationOutput(explanation="late"), delay=1.0)
        provider = provider_for("explain", agent, timeout_seconds=0.01, max_attempts=2)

        with pytest.raises(ProviderError, match="timed out") as exc_info:
            await provider.generate(ExplanationRequest(topic="X", difficulty="beginner"))

        assert exc_info.value.kind == "explain"
        assert exc_info.value.status_code == 502
        assert len(agent.prompts) == 2

    async def test_invalid_output_is_rejected(self) -> None:
        bad_answer = {
            "kind": "quiz",
            "questions": [{"question": "?", "options": ["a", "b"], "correct_answer": 5}],
        }
        provider = provider_for("quiz", FakeAgent(bad_answer), max_attempts=1)

        with pytest.raises(ProviderError, match="failed after 1 attempts"):
            await provider.generate(QuizRequest(topic="Math"))

    async def test_output_of_wrong_kind_is_rejected(self) -> None:
        provider = provider_for(
            "explain", FakeAgent({"kind": "chat", "reply": "hi"}), max_attempts=1
        )

        with pytest.raises(ProviderError):
            await provider.generate(ExplanationRequest(topic="X", difficulty="beginner"))


class TestBuildPrompt:
    def test_explanation_with_context(self) -> None:
        prompt = build_prompt(
            ExplanationRequest(topic="Closures", difficulty="beginner", context="knows loops")
        )

        assert prompt == "Topic: Closures\nDifficulty: beginner\nContext: knows loops"

    def test_chat_with_history(self) -> None:
        prompt = build_prompt(
            ChatRequest(
                prompt="and then?",
                history=(ChatMessage(role="user", text="hi"), ChatMessage(role="model", text="hello")),
            )
        )

        assert prompt == "Conversation so far:\nuser: hi\nmodel: hello\n\nuser: and then?"
