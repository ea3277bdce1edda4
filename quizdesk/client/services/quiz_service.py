"""Quiz authoring, lookup and leaderboard calls."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

from quizdesk import config
from quizdesk.client.http import QuizApiClient
from quizdesk.client.models import (
    CodeDistractors,
    Leaderboard,
    QuestionBankPage,
    QuizCreate,
    QuizDuplicate,
    QuizPage,
    QuizSummary,
    QuizUpdate,
)
from quizdesk.models import Quiz
from quizdesk.serialization import deserialize_quiz
from quizdesk.utils import validate_id

log = logging.getLogger(__name__)


def create_quiz(client: QuizApiClient, form: QuizCreate) -> dict[str, Any]:
    """Create a quiz. Returns the backend reply (``quiz.quizCode`` holds the new code)."""
    fields = form.form_fields()
    if form.pdfFile is None:
        # requests only switches to multipart when files are present
        files = {key: (None, value) for key, value in fields.items()}
        return client.post("/quiz/create", files=files, timeout=config.UPLOAD_TIMEOUT_SECONDS)

    with form.pdfFile.open("rb") as handle:
        files = {"pdfFile": (form.pdfFile.name, handle, "application/pdf")}
        return client.post(
            "/quiz/create",
            data=fields,
            files=files,
            timeout=config.UPLOAD_TIMEOUT_SECONDS,
        )


def get_quiz_list(client: QuizApiClient) -> list[QuizSummary]:
    return [QuizSummary.model_validate(item) for item in client.get("/quiz/list") or []]


def get_my_quizzes(
    client: QuizApiClient, page: int = 1, limit: int = config.DEFAULT_PAGE_SIZE
) -> QuizPage:
    return QuizPage.model_validate(
        client.get("/quiz/my-quizzes", params={"page": page, "limit": limit}) or {}
    )


def get_quiz_by_code(client: QuizApiClient, code: str) -> Quiz:
    """Look up a quiz by the code a student typed.

    Raises:
        NotFoundError: unknown code.
        QuizNotStartedError: scheduled quiz not yet open.
        QuizEndedError: scheduled quiz already closed.
    """
    code = validate_id("quiz code", code)
    payload = client.get(f"/quiz/code/{code}")
    quiz = deserialize_quiz(payload)
    log.info("Loaded quiz %s (%s questions, %s min)", quiz.id, len(quiz.questions), quiz.duration)
    return quiz


def get_quiz_submissions(client: QuizApiClient, quiz_id: str) -> list[dict[str, Any]]:
    return client.get(f"/quiz/{quiz_id}/submissions") or []


def delete_quiz(client: QuizApiClient, quiz_id: str) -> None:
    client.delete(f"/quiz/{quiz_id}")


def update_quiz(client: QuizApiClient, quiz_id: str, update: QuizUpdate) -> dict[str, Any]:
    return client.put(f"/quiz/{quiz_id}", json=update.model_dump(exclude_none=True)) or {}


def delete_question(client: QuizApiClient, quiz_id: str, question_index: int) -> None:
    client.delete(f"/quiz/{quiz_id}/questions/{question_index}")


def update_question_correct_answer(
    client: QuizApiClient,
    quiz_id: str,
    question_id: str,
    correct_answer: int | str,
) -> dict[str, Any]:
    return client.patch(
        f"/quiz/{quiz_id}/questions/{question_id}/correct-answer",
        json={"correctAnswer": correct_answer},
    ) or {}


def share_results(client: QuizApiClient, quiz_id: str) -> bool:
    """Toggle result sharing. Returns the new ``resultsShared`` flag."""
    data = client.patch(f"/quiz/{quiz_id}/share-results") or {}
    return bool(data.get("resultsShared"))


def get_quiz_leaderboard(client: QuizApiClient, quiz_id: str) -> Leaderboard:
    return Leaderboard.model_validate(client.get(f"/quiz/{quiz_id}/leaderboard") or {})


def get_overall_leaderboard(client: QuizApiClient) -> Leaderboard:
    return Leaderboard.model_validate(client.get("/quiz/leaderboard/overall") or {})


def duplicate_quiz(
    client: QuizApiClient, quiz_id: str, duplicate: QuizDuplicate
) -> dict[str, Any]:
    return client.post(f"/quiz/{quiz_id}/duplicate", json=duplicate.model_dump()) or {}


def get_all_questions(
    client: QuizApiClient, page: int = 1, limit: int = config.QUESTIONS_PAGE_SIZE
) -> QuestionBankPage:
    return QuestionBankPage.model_validate(
        client.get("/quiz/all-questions", params={"page": page, "limit": limit}) or {}
    )


def get_question_bank(
    client: QuizApiClient, filters: dict[str, Any] | None = None
) -> QuestionBankPage:
    path = "/quiz/question-bank"
    cleaned = {key: value for key, value in (filters or {}).items() if value not in (None, "")}
    if cleaned:
        path = f"{path}?{urlencode(cleaned, doseq=True)}"
    data = client.get(path)
    if isinstance(data, list):
        return QuestionBankPage(questions=data)
    return QuestionBankPage.model_validate(data or {})


def generate_code_distractors(
    client: QuizApiClient, code_snippet: str, language: str
) -> CodeDistractors:
    data = client.post(
        "/quiz/generate-code-distractors",
        json={"codeSnippet": code_snippet, "language": language},
        timeout=config.UPLOAD_TIMEOUT_SECONDS,
    )
    return CodeDistractors.model_validate(data or {})


def get_all_tags(client: QuizApiClient) -> list[str]:
    data = client.get("/quiz/tags") or []
    if isinstance(data, dict):
        data = data.get("tags", [])
    return [str(tag) for tag in data]
