"""Exception hierarchy shared by the API client, the attempt engine and the front ends."""
from __future__ import annotations

from typing import Any


class QuizdeskError(Exception):
    """Base exception class for quizdesk."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON response."""
        return {"message": self.message, "details": self.details}


# HTTP-level errors


class ApiError(QuizdeskError):
    """Backend call failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(message, details={"status_code": status_code})


class AuthenticationError(ApiError):
    """Missing, invalid or expired token (HTTP 401)."""


class PermissionDeniedError(ApiError):
    """Authenticated but not allowed (HTTP 403)."""


class NotFoundError(ApiError):
    """Resource not found (HTTP 404)."""


class ApiValidationError(ApiError):
    """Backend rejected the request (HTTP 400/409/422)."""


class ServiceUnavailableError(ApiError):
    """Network failure or 5xx reply."""


# Quiz load errors


class QuizNotStartedError(ApiError):
    """Scheduled quiz is not open yet."""

    def __init__(self, message: str, start_date: str | None = None, **kwargs: Any):
        self.start_date = start_date
        super().__init__(message, **kwargs)


class QuizEndedError(ApiError):
    """Scheduled quiz has closed."""

    def __init__(self, message: str, end_date: str | None = None, **kwargs: Any):
        self.end_date = end_date
        super().__init__(message, **kwargs)


# Attempt errors


class AttemptError(QuizdeskError):
    """Base exception for the attempt state machine."""


class AttemptStateError(AttemptError):
    """Operation is not allowed in the attempt's current state."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while attempt is {state}")


class IncompleteAttemptError(AttemptError):
    """Explicit submission with unanswered questions."""

    def __init__(self, unanswered: list[str]):
        self.unanswered = unanswered
        super().__init__(
            "Please answer all questions before submitting",
            details={"unanswered": unanswered},
        )


class InvalidAnswerError(AttemptError):
    """Answer value does not fit the question type."""


class SubmissionError(AttemptError):
    """Submitting the attempt failed; progress is kept for a retry."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
