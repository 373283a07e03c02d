from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter, model_validator
from pydantic_ai import Agent

from learnloop.infrastructure.ai.ai_model import get_ai_model


class ExplanationOutput(BaseModel):
    kind: Literal["explain"] = "explain"
    explanation: str = Field(min_length=1)
    examples: list[str] = Field(default_factory=list)
    key_points: list[str] = Field(default_factory=list)


class QuizQuestionOutput(BaseModel):
    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=2)
    correct_answer: int = Field(description="Zero-based index into options")
    explanation: str = ""

    @model_validator(mode="after")
    def check_correct_answer(self) -> "QuizQuestionOutput":
        if not 0 <= self.correct_answer < len(self.options):
            msg = "correct_answer must index one of the options"
            raise ValueError(msg)
        return self


class QuizOutput(BaseModel):
    kind: Literal["quiz"] = "quiz"
    questions: list[QuizQuestionOutput] = Field(min_length=1)


class FlashcardOutput(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class FlashcardDeckOutput(BaseModel):
    kind: Literal["flashcards"] = "flashcards"
    cards: list[FlashcardOutput] = Field(min_length=1)


class InterviewQuestionOutput(BaseModel):
    question: str = Field(min_length=1)
    category: str = Field(min_length=1)
    sample_answer: str = Field(min_length=1)


class InterviewOutput(BaseModel):
    kind: Literal["interview"] = "interview"
    questions: list[InterviewQuestionOutput] = Field(min_length=1)


class ChatOutput(BaseModel):
    kind: Literal["chat"] = "chat"
    reply: str = Field(min_length=1)


ContentOutput = Annotated[
    ExplanationOutput | QuizOutput | FlashcardDeckOutput | InterviewOutput | ChatOutput,
    Field(discriminator="kind"),
]

content_output_adapter: TypeAdapter[ContentOutput] = TypeAdapter(ContentOutput)


def get_explanation_agent() -> Agent[None, ExplanationOutput]:
    return Agent(
        get_ai_model(),
        output_type=ExplanationOutput,
        instructions="""
        You are a patient tutor. Explain the requested topic at the requested difficulty level.
        Beginner explanations avoid jargon; advanced explanations may assume background knowledge.
        Give 2-3 concrete examples and 3-5 key points the learner should remember.
        If extra context is given, tailor the explanation to it.
        """,
    )


def get_quiz_agent() -> Agent[None, QuizOutput]:
    return Agent(
        get_ai_model(),
        output_type=QuizOutput,
        instructions="""
        Create a multiple-choice quiz about the given topic.
        Each question has exactly four options and one correct answer.
        correct_answer is the zero-based index of the correct option.
        Add a one-sentence explanation of why the correct option is right.
        Generate exactly the requested number of questions.
        """,
    )


def get_flashcard_agent() -> Agent[None, FlashcardDeckOutput]:
    return Agent(
        get_ai_model(),
        output_type=FlashcardDeckOutput,
        instructions="""
        Generate flashcards for the given topic.
        Each card tests ONE detail only, with an unambiguous question and a precise answer.
        Questions must stand alone and avoid yes/no phrasing.
        Generate exactly the requested number of cards.
        """,
    )


def get_interview_agent() -> Agent[None, InterviewOutput]:
    return Agent(
        get_ai_model(),
        output_type=InterviewOutput,
        instructions="""
        You are preparing a candidate for a job interview.
        Generate 5 interview questions for the given role and seniority level,
        mixing technical, behavioral and situational categories.
        For each question give its category and a strong sample answer.
        """,
    )


def get_chat_agent() -> Agent[None, str]:
    return Agent(
        get_ai_model(),
        output_type=str,
        instructions="""
        You are a friendly study assistant. Answer the learner's question clearly and concisely.
        Use the earlier conversation, if any, for context.
        """,
    )
