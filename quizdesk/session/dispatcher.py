"""Turns an attempt's answers into a submission and posts it."""
from __future__ import annotations

import logging

from pydantic import ValidationError

from quizdesk.client.http import QuizApiClient
from quizdesk.client.models import SubmissionRequest, SubmissionResult
from quizdesk.client.services import submission_service
from quizdesk.errors import ApiError, SubmissionError
from quizdesk.models import Quiz, SessionState
from quizdesk.serialization import serialize_answer_records

log = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to submit quiz"


class SubmissionDispatcher:
    def __init__(self, client: QuizApiClient) -> None:
        self.client = client

    def build_request(self, quiz: Quiz, state: SessionState) -> SubmissionRequest:
        return SubmissionRequest(
            quizId=quiz.id,
            answers=serialize_answer_records(quiz, state.answers, state.hints_unlocked),
        )

    def dispatch(self, quiz: Quiz, state: SessionState) -> SubmissionResult:
        """POST the answers and return the graded result.

        Raises:
            SubmissionError: the backend call failed.
        """
        request = self.build_request(quiz, state)
        try:
            result = submission_service.submit_quiz(self.client, request)
        except ApiError as exc:
            log.warning("Submitting quiz %s failed: %s", quiz.id, exc.message)
            raise SubmissionError(exc.message or DEFAULT_FAILURE_MESSAGE, cause=exc) from exc
        except ValidationError as exc:
            log.warning("Unexpected submission reply for quiz %s: %s", quiz.id, exc)
            raise SubmissionError(DEFAULT_FAILURE_MESSAGE, cause=exc) from exc

        return result
