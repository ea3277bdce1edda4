"""State machine for a single quiz attempt.

``NOT_STARTED -> IN_PROGRESS -> SUBMITTING -> COMPLETED``, with
``SUBMITTING -> IN_PROGRESS`` when the backend call fails. The timer and
the student share one submission routine; whichever claims the
``IN_PROGRESS -> SUBMITTING`` transition first posts, the other returns
without posting.
"""
from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Callable

from quizdesk import config
from quizdesk.client.http import QuizApiClient
from quizdesk.client.models import SubmissionResult
from quizdesk.errors import (
    AttemptError,
    AttemptStateError,
    IncompleteAttemptError,
    InvalidAnswerError,
    SubmissionError,
)
from quizdesk.models import (
    AnswerValue,
    AttemptState,
    CodeDragDropQuestion,
    EssayQuestion,
    FillInBlankQuestion,
    McqQuestion,
    Question,
    Quiz,
    SessionState,
    TrueFalseQuestion,
    question_type_name,
)
from quizdesk.session.dispatcher import SubmissionDispatcher
from quizdesk.session.shuffler import ensure_shuffled
from quizdesk.session.store import SessionStore
from quizdesk.session.timer import QuizTimer
from quizdesk.storage import KeyValueStorage
from quizdesk.utils import format_countdown

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayedOption:
    letter: str
    text: str
    original_index: int


@dataclass(frozen=True)
class HintView:
    index: int
    point_penalty: int
    unlocked: bool
    text: str | None = None


@dataclass(frozen=True)
class QuestionView:
    """Everything a front end needs to render the current question."""

    index: int
    total: int
    question_id: str
    question_type: str
    text: str
    options: list[DisplayedOption] = field(default_factory=list)
    selected: AnswerValue | None = None
    hints: list[HintView] = field(default_factory=list)
    code_template: str | None = None
    language: str | None = None
    time_left: int = 0
    answered_count: int = 0
    question: Question | None = None

    @property
    def time_display(self) -> str:
        return format_countdown(self.time_left)

    @property
    def low_time(self) -> bool:
        return self.time_left < config.LOW_TIME_WARNING_SECONDS

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == self.total - 1

    @property
    def all_answered(self) -> bool:
        return self.answered_count == self.total


class QuizAttempt:
    def __init__(
        self,
        quiz: Quiz,
        client: QuizApiClient,
        storage: KeyValueStorage,
        *,
        rng: random.Random | None = None,
        tick_seconds: float | None = None,
        on_submitted: Callable[[SubmissionResult], None] | None = None,
        on_error: Callable[[SubmissionError], None] | None = None,
    ) -> None:
        if not quiz.questions:
            raise AttemptError("Quiz has no questions")
        self.quiz = quiz
        self.store = SessionStore(storage)
        self.dispatcher = SubmissionDispatcher(client)
        self.rng = rng
        self.tick_seconds = tick_seconds
        self.on_submitted = on_submitted
        self.on_error = on_error

        self._lock = threading.RLock()
        self._state = AttemptState.NOT_STARTED
        self._session: SessionState | None = None
        self._timer: QuizTimer | None = None
        self.resumed = False
        self.result: SubmissionResult | None = None
        self.last_error: SubmissionError | None = None

    # lifecycle

    @property
    def state(self) -> AttemptState:
        return self._state

    @property
    def session(self) -> SessionState:
        if self._session is None:
            raise AttemptStateError("read progress", self._state.value)
        return self._session

    def start(self, run_timer: bool = True) -> "QuizAttempt":
        """Load or create progress, shuffle once, persist and start the countdown."""
        with self._lock:
            if self._state is not AttemptState.NOT_STARTED:
                raise AttemptStateError("start", self._state.value)
            session, self.resumed = self.store.load_or_create(self.quiz)
            ensure_shuffled(session, self.quiz, self.rng)
            self._session = session
            self._state = AttemptState.IN_PROGRESS
            self.store.save(session)
        if run_timer:
            self._timer = QuizTimer(self.tick, interval=self.tick_seconds, name=f"quiz_timer_{self.quiz.id}")
            self._timer.start()
        return self

    def close(self) -> None:
        """Stop the countdown. Saved progress stays so the attempt can be resumed."""
        self._stop_timer()

    def _stop_timer(self) -> None:
        timer = self._timer
        if timer is not None:
            timer.stop()

    def _require_in_progress(self, operation: str) -> SessionState:
        if self._state is not AttemptState.IN_PROGRESS or self._session is None:
            raise AttemptStateError(operation, self._state.value)
        return self._session

    def _persist(self) -> None:
        if self._state is not AttemptState.IN_PROGRESS or self._session is None:
            return
        self.store.save(self._session)

    # student actions

    def select_answer(self, question_id: str, value: AnswerValue) -> None:
        with self._lock:
            session = self._require_in_progress("answer")
            question = self._question(question_id)
            session.answers[question_id] = _validated_answer(question, value)
            self._persist()

    def select_displayed_option(self, display_index: int, question_id: str | None = None) -> int:
        """Answer with the option shown at ``display_index``; returns the original index sent to the backend."""
        with self._lock:
            session = self._require_in_progress("answer")
            question_id = question_id or self.quiz.questions[session.current_question].id
            question = self._question(question_id)
            if not isinstance(question, (McqQuestion, TrueFalseQuestion)):
                raise InvalidAnswerError(f"Question {question_id} has no selectable options")
            displayed = session.shuffled_options.get(question_id, [])
            if not 0 <= display_index < len(displayed):
                raise InvalidAnswerError(f"No option at position {display_index + 1}")
            original_index = displayed[display_index].original_index
            session.answers[question_id] = original_index
            self._persist()
            return original_index

    def clear_answer(self, question_id: str) -> None:
        with self._lock:
            session = self._require_in_progress("clear an answer")
            self._question(question_id)
            session.answers.pop(question_id, None)
            self._persist()

    def unlock_hint(self, question_id: str, hint_index: int) -> str:
        """Reveal a hint; unlocking costs points at grading time. Returns the hint text."""
        with self._lock:
            session = self._require_in_progress("unlock a hint")
            question = self._question(question_id)
            if not isinstance(question, EssayQuestion):
                raise InvalidAnswerError(f"Question {question_id} has no hints")
            if not 0 <= hint_index < len(question.hints):
                raise InvalidAnswerError(f"Question {question_id} has no hint {hint_index + 1}")
            unlocked = session.hints_unlocked.setdefault(question_id, [])
            if hint_index not in unlocked:
                unlocked.append(hint_index)
                self._persist()
            return question.hints[hint_index].text

    def go_to(self, index: int) -> None:
        with self._lock:
            session = self._require_in_progress("navigate")
            if not 0 <= index < len(self.quiz.questions):
                raise AttemptError(f"Question {index + 1} does not exist")
            session.current_question = index
            self._persist()

    def next_question(self) -> None:
        with self._lock:
            self.go_to(self._require_in_progress("navigate").current_question + 1)

    def previous_question(self) -> None:
        with self._lock:
            self.go_to(self._require_in_progress("navigate").current_question - 1)

    # countdown

    def tick(self) -> bool:
        """Advance the countdown by one second. Returns False once the timer should stop."""
        with self._lock:
            if self._state not in (AttemptState.IN_PROGRESS, AttemptState.SUBMITTING) or self._session is None:
                return False
            session = self._session
            session.time_left = max(0, session.time_left - 1)
            self._persist()
            expired = session.time_left == 0
            if not expired:
                log.debug("Quiz %s: %ss left", self.quiz.id, session.time_left)
                return True

        log.info("Time is up for quiz %s; submitting %s answers", self.quiz.id, self.answered_count)
        try:
            self.submit(force=True)
        except SubmissionError:
            pass  # already reported through on_error
        return False

    # submission

    @property
    def answered_count(self) -> int:
        return len(self._session.answers) if self._session else 0

    @property
    def unanswered(self) -> list[str]:
        answers = self._session.answers if self._session else {}
        return [question.id for question in self.quiz.questions if question.id not in answers]

    @property
    def all_answered(self) -> bool:
        return not self.unanswered

    @property
    def time_expired(self) -> bool:
        return self._session is not None and self._session.time_left <= 0

    def submit(self, force: bool = False) -> SubmissionResult | None:
        """Submit the attempt.

        Explicit submission needs every question answered unless ``force``
        is set or the time has run out, in which case partial answers are
        sent as-is. Returns None without posting when another submission
        already claimed the attempt.

        Raises:
            IncompleteAttemptError: unanswered questions and not forced.
            SubmissionError: the backend call failed; the attempt is back in progress.
        """
        with self._lock:
            if self._state is not AttemptState.IN_PROGRESS or self._session is None:
                if self._state is AttemptState.NOT_STARTED:
                    raise AttemptStateError("submit", self._state.value)
                log.debug("Submission for quiz %s already claimed (%s)", self.quiz.id, self._state.value)
                return None
            if not (force or self.time_expired) and not self.all_answered:
                raise IncompleteAttemptError(self.unanswered)
            self._state = AttemptState.SUBMITTING
            session = self._session

        try:
            result = self.dispatcher.dispatch(self.quiz, session)
        except SubmissionError as exc:
            with self._lock:
                self._state = AttemptState.IN_PROGRESS
                self.last_error = exc
            if self.on_error is not None:
                self.on_error(exc)
            raise

        with self._lock:
            self._state = AttemptState.COMPLETED
            self.result = result
            self.last_error = None
            self.store.clear(self.quiz.id)
        self._stop_timer()
        if self.on_submitted is not None:
            self.on_submitted(result)
        return result

    # views

    def _question(self, question_id: str) -> Question:
        question = self.quiz.question(question_id)
        if question is None:
            raise InvalidAnswerError(f"Unknown question {question_id}")
        return question

    def current_view(self) -> QuestionView:
        with self._lock:
            session = self.session
            question = self.quiz.questions[session.current_question]
            return self._view(question, session)

    def _view(self, question: Question, session: SessionState) -> QuestionView:
        options = [
            DisplayedOption(letter=chr(ord("A") + position), text=item.option, original_index=item.original_index)
            for position, item in enumerate(session.shuffled_options.get(question.id, []))
        ]
        base = dict(
            index=session.current_question,
            total=len(self.quiz.questions),
            question_id=question.id,
            question_type=question_type_name(question),
            text=question.text,
            selected=session.answers.get(question.id),
            time_left=session.time_left,
            answered_count=len(session.answers),
            question=question,
        )
        match question:
            case McqQuestion() | TrueFalseQuestion():
                return QuestionView(options=options, **base)
            case EssayQuestion(hints=hints):
                unlocked = session.hints_unlocked.get(question.id, [])
                hint_views = [
                    HintView(
                        index=index,
                        point_penalty=hint.point_penalty,
                        unlocked=index in unlocked,
                        text=hint.text if index in unlocked else None,
                    )
                    for index, hint in enumerate(hints)
                ]
                return QuestionView(hints=hint_views, **base)
            case CodeDragDropQuestion(code_template=template, language=language):
                return QuestionView(options=options, code_template=template, language=language, **base)
            case FillInBlankQuestion():
                return QuestionView(**base)
        raise TypeError(f"Unknown question type: {type(question).__name__}")


def _validated_answer(question: Question, value: AnswerValue) -> AnswerValue:
    """Check an answer against the question variant."""
    match question:
        case McqQuestion(options=options) | TrueFalseQuestion(options=options):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidAnswerError("Choice answers are option indexes")
            if not 0 <= value < len(options):
                raise InvalidAnswerError(f"Option index {value} out of range")
            return value
        case FillInBlankQuestion() | EssayQuestion():
            if not isinstance(value, str):
                raise InvalidAnswerError("Typed answers must be text")
            return value
        case CodeDragDropQuestion(blanks=blanks, options=options):
            if not isinstance(value, dict):
                raise InvalidAnswerError("Code answers map blank ids to tokens")
            blank_ids = {str(blank.id) for blank in blanks}
            filled = {str(key): token for key, token in value.items()}
            for blank_id, token in filled.items():
                if blank_id not in blank_ids:
                    raise InvalidAnswerError(f"Unknown blank {blank_id}")
                if token not in options:
                    raise InvalidAnswerError(f"Unknown token {token!r}")
            return filled
    raise TypeError(f"Unknown question type: {type(question).__name__}")
