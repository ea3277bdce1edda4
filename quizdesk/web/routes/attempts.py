"""Attempt endpoints of the web player."""
from typing import Annotated

from fastapi import APIRouter, Depends

from quizdesk import config
from quizdesk.client import QuizApiClient
from quizdesk.client.services import quiz_service
from quizdesk.models import AttemptState
from quizdesk.session import QuizAttempt
from quizdesk.storage import KeyValueStorage
from quizdesk.utils import format_countdown, validate_id
from quizdesk.web.dependencies import get_client, get_registry, get_storage
from quizdesk.web.models import (
    AnswerRequest,
    AttemptView,
    DisplayedOptionAnswerRequest,
    HintRequest,
    HintStatus,
    NavigateRequest,
    OptionView,
    QuestionPayload,
    StartAttemptRequest,
    SubmitRequest,
)
from quizdesk.web.registry import AttemptRegistry

router = APIRouter(prefix="/api/attempts", tags=["attempts"])

Client = Annotated[QuizApiClient, Depends(get_client)]
Storage = Annotated[KeyValueStorage, Depends(get_storage)]
Registry = Annotated[AttemptRegistry, Depends(get_registry)]


def attempt_view(attempt: QuizAttempt) -> AttemptView:
    """Snapshot of ``attempt`` for the browser."""
    session = attempt.session
    question = None
    if attempt.state is not AttemptState.COMPLETED:
        view = attempt.current_view()
        question = QuestionPayload(
            index=view.index,
            questionId=view.question_id,
            questionType=view.question_type,
            text=view.text,
            options=[
                OptionView(letter=option.letter, text=option.text, originalIndex=option.original_index)
                for option in view.options
            ],
            selected=view.selected,
            hints=[
                HintStatus(index=hint.index, pointPenalty=hint.point_penalty, unlocked=hint.unlocked, text=hint.text)
                for hint in view.hints
            ],
            codeTemplate=view.code_template,
            language=view.language,
            isFirst=view.is_first,
            isLast=view.is_last,
        )
    return AttemptView(
        quizId=attempt.quiz.id,
        title=attempt.quiz.title,
        state=attempt.state.value,
        resumed=attempt.resumed,
        timeLeft=session.time_left,
        timeDisplay=format_countdown(session.time_left),
        lowTime=session.time_left < config.LOW_TIME_WARNING_SECONDS,
        answeredCount=attempt.answered_count,
        totalQuestions=len(attempt.quiz.questions),
        question=question,
        result=attempt.result.model_dump() if attempt.result else None,
        lastError=attempt.last_error.message if attempt.last_error else None,
    )


def _reply(attempt: QuizAttempt, registry: AttemptRegistry) -> AttemptView:
    """View of ``attempt``; a completed attempt is released once its result is returned."""
    view = attempt_view(attempt)
    if attempt.state is AttemptState.COMPLETED:
        registry.discard(attempt)
    return view


@router.post("", response_model=AttemptView)
def start_attempt(
    payload: StartAttemptRequest,
    client: Client,
    storage: Storage,
    registry: Registry,
) -> AttemptView:
    """Load a quiz by code and start the attempt, resuming saved progress."""
    quiz = quiz_service.get_quiz_by_code(client, payload.code)
    existing = registry.find(quiz.id)
    if existing is not None and existing.state is not AttemptState.COMPLETED:
        return attempt_view(existing)
    attempt = QuizAttempt(quiz, client, storage)
    attempt.start()
    registry.add(attempt)
    return attempt_view(attempt)


@router.get("/{quiz_id}", response_model=AttemptView)
def get_attempt(quiz_id: str, registry: Registry) -> AttemptView:
    return _reply(registry.get(validate_id("quizId", quiz_id)), registry)


@router.post("/{quiz_id}/answers", response_model=AttemptView)
def answer_question(quiz_id: str, payload: AnswerRequest, registry: Registry) -> AttemptView:
    attempt = registry.get(validate_id("quizId", quiz_id))
    attempt.select_answer(payload.questionId, payload.answer)
    return _reply(attempt, registry)


@router.post("/{quiz_id}/options", response_model=AttemptView)
def choose_displayed_option(
    quiz_id: str,
    payload: DisplayedOptionAnswerRequest,
    registry: Registry,
) -> AttemptView:
    attempt = registry.get(validate_id("quizId", quiz_id))
    attempt.select_displayed_option(payload.displayIndex, payload.questionId)
    return _reply(attempt, registry)


@router.delete("/{quiz_id}/answers/{question_id}", response_model=AttemptView)
def clear_answer(quiz_id: str, question_id: str, registry: Registry) -> AttemptView:
    attempt = registry.get(validate_id("quizId", quiz_id))
    attempt.clear_answer(question_id)
    return _reply(attempt, registry)


@router.post("/{quiz_id}/navigate", response_model=AttemptView)
def navigate(quiz_id: str, payload: NavigateRequest, registry: Registry) -> AttemptView:
    attempt = registry.get(validate_id("quizId", quiz_id))
    attempt.go_to(payload.index)
    return _reply(attempt, registry)


@router.post("/{quiz_id}/hints", response_model=AttemptView)
def unlock_hint(quiz_id: str, payload: HintRequest, registry: Registry) -> AttemptView:
    attempt = registry.get(validate_id("quizId", quiz_id))
    attempt.unlock_hint(payload.questionId, payload.hintIndex)
    return _reply(attempt, registry)


@router.post("/{quiz_id}/submit", response_model=AttemptView)
def submit_attempt(quiz_id: str, payload: SubmitRequest, registry: Registry) -> AttemptView:
    """Submit the answers.

    A submission already in flight (the timer firing at the same moment)
    is not repeated; the current snapshot is returned instead.
    """
    attempt = registry.get(validate_id("quizId", quiz_id))
    attempt.submit(force=payload.force)
    return _reply(attempt, registry)


@router.delete("/{quiz_id}")
def close_attempt(quiz_id: str, registry: Registry) -> dict[str, str]:
    """Stop the countdown and forget the live attempt. Saved progress is kept."""
    quiz_id = validate_id("quizId", quiz_id)
    registry.remove(quiz_id)
    return {"status": "closed", "quizId": quiz_id}
