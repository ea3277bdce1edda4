"""Pydantic models for backend payloads."""
from quizdesk.client.models.auth import (
    AuthResponse,
    StudentSummary,
    UserInfo,
    UserLogin,
    UserRegister,
)
from quizdesk.client.models.groups import Group, GroupCreate, GroupUpdate
from quizdesk.client.models.quizzes import (
    CodeDistractors,
    Leaderboard,
    LeaderboardEntry,
    Pagination,
    QuestionBankPage,
    QuizCreate,
    QuizDuplicate,
    QuizPage,
    QuizSummary,
    QuizUpdate,
)
from quizdesk.client.models.submissions import (
    AnswerRecord,
    DetailedResult,
    EssayGrading,
    FlagCreate,
    FlaggedQuestion,
    FlagStatusUpdate,
    SubmissionRequest,
    SubmissionResponse,
    SubmissionResult,
)

__all__ = [
    "AnswerRecord",
    "AuthResponse",
    "CodeDistractors",
    "DetailedResult",
    "EssayGrading",
    "FlagCreate",
    "FlaggedQuestion",
    "FlagStatusUpdate",
    "Group",
    "GroupCreate",
    "GroupUpdate",
    "Leaderboard",
    "LeaderboardEntry",
    "Pagination",
    "QuestionBankPage",
    "QuizCreate",
    "QuizDuplicate",
    "QuizPage",
    "QuizSummary",
    "QuizUpdate",
    "StudentSummary",
    "SubmissionRequest",
    "SubmissionResponse",
    "SubmissionResult",
    "UserInfo",
    "UserLogin",
    "UserRegister",
]
