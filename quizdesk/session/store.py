"""Durable attempt progress keyed by quiz id."""
from __future__ import annotations

import logging

from quizdesk import config
from quizdesk.models import Quiz, SessionState, question_options
from quizdesk.serialization import deserialize_session_state, serialize_session_state
from quizdesk.storage import KeyValueStorage
from quizdesk.utils import json_load, ndjson_dump

log = logging.getLogger(__name__)


def _shuffle_mismatch(state: SessionState, quiz: Quiz) -> str | None:
    """Describe why a saved option order no longer fits ``quiz``, or None."""
    if not state.shuffled_options:
        return None
    for question in quiz.questions:
        options = question_options(question)
        if not options:
            continue
        items = state.shuffled_options.get(question.id)
        if items is None:
            return f"no option order for question {question.id}"
        if sorted(item.original_index for item in items) != list(range(len(options))):
            return f"option order for question {question.id} does not match its options"
    return None


def progress_key(quiz_id: str) -> str:
    return f"{config.PROGRESS_KEY_PREFIX}{quiz_id}"


def fresh_state(quiz: Quiz) -> SessionState:
    """Initial state: first question, no answers, the full duration, no shuffle yet."""
    return SessionState(quiz_id=quiz.id, time_left=quiz.duration * 60)


class SessionStore:
    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def load(self, quiz: Quiz) -> SessionState | None:
        """Return the saved state for ``quiz`` or None.

        Unreadable snapshots and snapshots recorded for a different quiz id
        are ignored, never merged.
        """
        try:
            raw = self.storage.get(progress_key(quiz.id))
            if raw is None:
                return None
            state = deserialize_session_state(json_load(raw))
        except (ValueError, TypeError, KeyError) as exc:
            log.warning("Discarding unreadable progress for quiz %s: %s", quiz.id, exc)
            return None
        if state.quiz_id != quiz.id:
            log.warning(
                "Ignoring progress saved for quiz %s under key of quiz %s",
                state.quiz_id,
                quiz.id,
            )
            return None
        problem = _shuffle_mismatch(state, quiz)
        if problem:
            log.warning("Discarding progress for quiz %s: %s", quiz.id, problem)
            return None
        if quiz.questions:
            state.current_question = min(state.current_question, len(quiz.questions) - 1)
        return state

    def load_or_create(self, quiz: Quiz) -> tuple[SessionState, bool]:
        """Resume saved progress if any. Returns ``(state, resumed)``."""
        state = self.load(quiz)
        if state is not None:
            log.info(
                "Resuming quiz %s at question %s with %ss left",
                quiz.id,
                state.current_question + 1,
                state.time_left,
            )
            return state, True
        return fresh_state(quiz), False

    def save(self, state: SessionState) -> None:
        self.storage.set(progress_key(state.quiz_id), ndjson_dump(serialize_session_state(state)))

    def clear(self, quiz_id: str) -> None:
        self.storage.clear(progress_key(quiz_id))

    def saved_quiz_ids(self) -> list[str]:
        prefix = config.PROGRESS_KEY_PREFIX
        return [key[len(prefix):] for key in self.storage.keys(prefix)]
