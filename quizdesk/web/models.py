"""Request and view models for the web player."""
from typing import Any

from pydantic import BaseModel, Field


class StartAttemptRequest(BaseModel):
    """Start or resume the attempt for a quiz code."""

    code: str = Field(..., min_length=1)


class AnswerRequest(BaseModel):
    """Model for answering a question.

    ``answer`` is the original option index for choice questions, text for
    fill-in-blank and essay questions, and a blank id to token map for code
    questions.
    """

    questionId: str = Field(..., min_length=1)
    answer: int | str | dict[str, str]


class DisplayedOptionAnswerRequest(BaseModel):
    """Answer by the position an option is shown at."""

    questionId: str = Field(..., min_length=1)
    displayIndex: int = Field(..., ge=0)


class NavigateRequest(BaseModel):
    index: int


class HintRequest(BaseModel):
    questionId: str = Field(..., min_length=1)
    hintIndex: int = Field(..., ge=0)


class SubmitRequest(BaseModel):
    force: bool = False


class OptionView(BaseModel):
    letter: str
    text: str
    originalIndex: int


class HintStatus(BaseModel):
    index: int
    pointPenalty: int
    unlocked: bool
    text: str | None = None


class QuestionPayload(BaseModel):
    """Current question as rendered by the player."""

    index: int
    questionId: str
    questionType: str
    text: str
    options: list[OptionView] = Field(default_factory=list)
    selected: Any = None
    hints: list[HintStatus] = Field(default_factory=list)
    codeTemplate: str | None = None
    language: str | None = None
    isFirst: bool
    isLast: bool


class AttemptView(BaseModel):
    """Model for the attempt snapshot returned by every endpoint."""

    quizId: str
    title: str
    state: str
    resumed: bool = False
    timeLeft: int
    timeDisplay: str
    lowTime: bool
    answeredCount: int
    totalQuestions: int
    question: QuestionPayload | None = None
    result: dict[str, Any] | None = None
    lastError: str | None = None
