"""Submission, results and flag review calls."""
from __future__ import annotations

import logging
from typing import Any

from quizdesk import config
from quizdesk.client.http import QuizApiClient
from quizdesk.client.models import (
    FlagCreate,
    FlaggedQuestion,
    FlagStatusUpdate,
    SubmissionRequest,
    SubmissionResult,
    SubmissionResponse,
)

log = logging.getLogger(__name__)


def submit_quiz(client: QuizApiClient, request: SubmissionRequest) -> SubmissionResult:
    """POST the answers and return the graded result."""
    data = client.post("/submission", json=request.model_dump())
    response = SubmissionResponse.model_validate(data or {})
    log.info(
        "Submitted quiz %s: %s/%s (%.2f%%)%s",
        request.quizId,
        response.result.score,
        response.result.totalQuestions,
        response.result.percentage,
        " [practice]" if response.result.isPractice else "",
    )
    return response.result


def get_submission(client: QuizApiClient, quiz_id: str) -> dict[str, Any]:
    """The current user's submission for a quiz."""
    return client.get(f"/submission/quiz/{quiz_id}") or {}


def get_my_submissions(
    client: QuizApiClient, page: int = 1, limit: int = config.DEFAULT_PAGE_SIZE
) -> list[dict[str, Any]]:
    data = client.get("/submission/my-submissions", params={"page": page, "limit": limit})
    if isinstance(data, dict):
        return data.get("submissions", [])
    return data or []


def flag_question(client: QuizApiClient, flag: FlagCreate) -> dict[str, Any]:
    return client.post("/submission/flag-question", json=flag.model_dump()) or {}


def get_submission_flags(client: QuizApiClient, submission_id: str) -> list[FlaggedQuestion]:
    data = client.get(f"/submission/submission/{submission_id}/flags") or []
    if isinstance(data, dict):
        data = data.get("flags", [])
    return [FlaggedQuestion.model_validate(item) for item in data]


def get_flagged_questions(
    client: QuizApiClient, status: str | None = None
) -> list[FlaggedQuestion]:
    if status and status not in config.FLAG_STATUSES:
        raise ValueError(f"Unknown flag status: {status}")
    params = {"status": status} if status else None
    data = client.get("/submission/flagged-questions", params=params) or []
    return [FlaggedQuestion.model_validate(item) for item in data]


def update_flag_status(
    client: QuizApiClient, flag_id: str, status: str, admin_notes: str = ""
) -> dict[str, Any]:
    update = FlagStatusUpdate(status=status, adminNotes=admin_notes)
    return client.patch(
        f"/submission/flagged-questions/{flag_id}", json=update.model_dump()
    ) or {}
