"""Submission and flag Pydantic models."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from quizdesk.config import PASS_PERCENTAGE

FlagStatus = Literal["pending", "reviewed", "resolved", "rejected"]


class AnswerRecord(BaseModel):
    """One answered question in a submission."""

    questionId: str
    selectedAnswer: int | str | dict[str, str]
    hintsUsed: list[int] = Field(default_factory=list)


class SubmissionRequest(BaseModel):
    """Body of ``POST /submission``."""

    quizId: str = Field(..., min_length=1)
    answers: list[AnswerRecord]


class EssayGrading(BaseModel):
    score: float
    feedback: str = ""
    strengths: str | None = None
    improvements: str | None = None


class DetailedResult(BaseModel):
    """Per-question outcome computed by the backend."""

    questionId: str
    question: str = ""
    questionType: str | None = None
    options: list[str] = Field(default_factory=list)
    selectedAnswer: Any = None
    correctAnswer: Any = None
    isCorrect: bool = False
    explanation: str | None = None
    essayGrading: EssayGrading | None = None


class SubmissionResult(BaseModel):
    """Terminal result of a submitted attempt."""

    score: float
    totalQuestions: int
    percentage: float
    detailedResults: list[DetailedResult] = Field(default_factory=list)
    isPractice: bool = False
    attemptNumber: int = 1

    @property
    def passed(self) -> bool:
        return self.percentage >= PASS_PERCENTAGE


class SubmissionResponse(BaseModel):
    """Envelope returned by ``POST /submission``."""

    result: SubmissionResult
    message: str | None = None


class FlagCreate(BaseModel):
    """Student dispute of a question's recorded correct answer."""

    submissionId: str = Field(..., min_length=1)
    questionId: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1, max_length=1000)


class FlagStatusUpdate(BaseModel):
    """Admin review of a flag."""

    status: FlagStatus
    adminNotes: str = ""


class FlaggedQuestion(BaseModel):
    """Flag with the quiz, question and student it refers to."""

    id: str = Field(..., alias="_id")
    status: FlagStatus = "pending"
    reason: str = ""
    quiz: dict[str, Any] | str | None = None
    question: str | None = None
    questionDetails: dict[str, Any] | None = None
    userAnswer: Any = None
    user: dict[str, Any] | None = None
    adminNotes: str | None = None
    createdAt: str | None = None

    class Config:
        populate_by_name = True

    @property
    def quiz_id(self) -> str | None:
        if isinstance(self.quiz, dict):
            value = self.quiz.get("_id")
            return str(value) if value is not None else None
        return self.quiz
