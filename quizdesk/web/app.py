"""FastAPI application for the local web player."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quizdesk import config
from quizdesk.core.logging_setup import setup_console_logging
from quizdesk.errors import (
    ApiValidationError,
    AttemptError,
    AttemptStateError,
    AuthenticationError,
    IncompleteAttemptError,
    InvalidAnswerError,
    NotFoundError,
    PermissionDeniedError,
    QuizdeskError,
    QuizEndedError,
    QuizNotStartedError,
    SubmissionError,
)
from quizdesk.web.dependencies import get_registry
from quizdesk.web.routes import attempts, health

setup_console_logging(config.LOG_LEVEL)

log = logging.getLogger(__name__)

app = FastAPI(title="Quizdesk Player")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_status(exc: QuizdeskError) -> int:
    """HTTP status for an error raised by the client or the attempt engine."""
    if isinstance(exc, (QuizNotStartedError, QuizEndedError, AttemptStateError)):
        return 409
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, PermissionDeniedError):
        return 403
    if isinstance(exc, InvalidAnswerError):
        return 422
    if isinstance(exc, (ApiValidationError, IncompleteAttemptError)):
        return 400
    if isinstance(exc, SubmissionError):
        return 502
    if isinstance(exc, AttemptError):
        return 400
    return 502


@app.exception_handler(QuizdeskError)
async def quizdesk_error_handler(request: Request, exc: QuizdeskError) -> JSONResponse:
    body = exc.to_dict()
    if isinstance(exc, QuizNotStartedError):
        body["startDate"] = exc.start_date
    if isinstance(exc, QuizEndedError):
        body["endDate"] = exc.end_date
    status_code = error_status(exc)
    if status_code >= 500:
        log.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": str(exc), "details": {}})


# Shutdown events
@app.on_event("shutdown")
def shutdown_events() -> None:
    """Stop every countdown; saved progress is resumed on the next start."""
    get_registry().close_all()


# Include routers
app.include_router(health.router)
app.include_router(attempts.router)
