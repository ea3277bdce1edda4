"""Quiz-related Pydantic models."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from quizdesk.config import DIFFICULTIES
from quizdesk.utils import ndjson_dump


class QuizCreate(BaseModel):
    """Form for creating a quiz from a PDF, a URL or existing quizzes."""

    title: str = Field(..., min_length=1)
    description: str = ""
    duration: int = Field(30, ge=1)
    numQuestions: int = Field(10, ge=1)
    difficulty: str = "Medium"
    randomizeQuestions: bool = False
    contentUrl: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    selectedQuizIds: list[str] = Field(default_factory=list)
    difficultyBreakdown: dict[str, int] = Field(default_factory=dict)
    pdfFile: Path | None = None

    @field_validator("difficulty")
    @classmethod
    def _known_difficulty(cls, value: str) -> str:
        if value not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        return value

    @field_validator("difficultyBreakdown")
    @classmethod
    def _known_breakdown(cls, value: dict[str, int]) -> dict[str, int]:
        for difficulty, count in value.items():
            if difficulty not in DIFFICULTIES:
                raise ValueError(f"Unknown difficulty: {difficulty}")
            if count < 0:
                raise ValueError("Question counts must not be negative")
        return value

    @field_validator("pdfFile")
    @classmethod
    def _pdf_only(cls, value: Path | None) -> Path | None:
        if value is not None and value.suffix.lower() != ".pdf":
            raise ValueError("Please select a PDF file")
        return value

    @model_validator(mode="after")
    def _has_source(self) -> "QuizCreate":
        if not self.pdfFile and not self.contentUrl and not self.selectedQuizIds:
            raise ValueError("Please provide a PDF file, URL, or select existing quizzes")
        if (self.pdfFile or self.contentUrl) and self.difficultyBreakdown:
            if sum(self.difficultyBreakdown.values()) == 0:
                raise ValueError(
                    "Please specify number of questions for selected difficulty levels"
                )
        return self

    def form_fields(self) -> dict[str, str]:
        """Multipart text fields, matching the backend's form parser."""
        data = {
            "title": self.title,
            "description": self.description,
            "duration": str(self.duration),
            "randomizeQuestions": "true" if self.randomizeQuestions else "false",
        }
        if self.contentUrl:
            data["contentUrl"] = self.contentUrl
        if self.startDate:
            data["startDate"] = self.startDate
        if self.endDate:
            data["endDate"] = self.endDate
        if self.selectedQuizIds:
            data["selectedQuizIds"] = ndjson_dump(self.selectedQuizIds)

        breakdown = {key: count for key, count in self.difficultyBreakdown.items() if count > 0}
        if breakdown:
            data["difficultyBreakdown"] = ndjson_dump(breakdown)
            data["numQuestions"] = str(sum(breakdown.values()))
        else:
            data["numQuestions"] = str(self.numQuestions)
            data["difficulty"] = self.difficulty
        return data


class QuizUpdate(BaseModel):
    """Editable quiz metadata."""

    title: str | None = None
    description: str | None = None
    duration: int | None = Field(None, ge=1)
    startDate: str | None = None
    endDate: str | None = None


class QuizDuplicate(BaseModel):
    """Copy of an existing quiz with new metadata and a new code."""

    title: str = ""
    description: str = ""
    duration: int = Field(30, ge=1)
    startDate: str = ""
    endDate: str = ""


class QuizSummary(BaseModel):
    """Quiz row in listings."""

    id: str = Field(..., alias="_id")
    title: str = ""
    description: str = ""
    quizCode: str | None = None
    duration: int | None = None
    questions: list[dict[str, Any]] = Field(default_factory=list)
    resultsShared: bool = False
    startDate: str | None = None
    endDate: str | None = None
    createdAt: str | None = None

    class Config:
        populate_by_name = True


class Pagination(BaseModel):
    currentPage: int = 1
    totalPages: int = 1
    totalQuizzes: int | None = None
    hasNextPage: bool = False
    hasPrevPage: bool = False


class QuizPage(BaseModel):
    """One page of the admin's quizzes."""

    quizzes: list[QuizSummary] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class QuestionBankPage(BaseModel):
    """Questions across all quizzes."""

    questions: list[dict[str, Any]] = Field(default_factory=list)
    totalQuizzes: int | None = None
    pagination: Pagination | None = None


class LeaderboardEntry(BaseModel):
    rank: int
    userId: str
    userName: str = ""
    userEmail: str = ""
    totalQuizzes: int | None = None
    averageScore: float | None = None
    averagePercentage: float | None = None
    totalScore: int | None = None
    totalQuestions: int | None = None
    score: int | None = None
    percentage: float | None = None


class Leaderboard(BaseModel):
    leaderboard: list[LeaderboardEntry] = Field(default_factory=list)
    totalUsers: int | None = None


class CodeDistractors(BaseModel):
    """Reply of the AI distractor generator."""

    correctAnswers: list[str] = Field(default_factory=list)
    distractors: list[str] = Field(default_factory=list)
    allOptions: list[str] | None = None
