"""Live attempts held by the web player process."""
from __future__ import annotations

import logging
import threading

from quizdesk.errors import NotFoundError
from quizdesk.models import AttemptState
from quizdesk.session import QuizAttempt

log = logging.getLogger(__name__)


class AttemptRegistry:
    """One running :class:`QuizAttempt` per quiz id."""

    def __init__(self) -> None:
        self._attempts: dict[str, QuizAttempt] = {}
        self._lock = threading.Lock()

    def get(self, quiz_id: str) -> QuizAttempt:
        with self._lock:
            attempt = self._attempts.get(quiz_id)
        if attempt is None:
            raise NotFoundError(f"No open attempt for quiz {quiz_id}", status_code=404)
        return attempt

    def find(self, quiz_id: str) -> QuizAttempt | None:
        with self._lock:
            return self._attempts.get(quiz_id)

    def add(self, attempt: QuizAttempt) -> QuizAttempt:
        """Register ``attempt``, closing any attempt it replaces.

        Completed attempts nobody collected are dropped at the same time.
        """
        with self._lock:
            finished = [quiz_id for quiz_id, live in self._attempts.items() if live.state is AttemptState.COMPLETED]
            for quiz_id in finished:
                del self._attempts[quiz_id]
            previous = self._attempts.get(attempt.quiz.id)
            self._attempts[attempt.quiz.id] = attempt
        if previous is not None and previous is not attempt:
            previous.close()
        if finished:
            log.debug("Dropped %s completed attempt(s)", len(finished))
        return attempt

    def discard(self, attempt: QuizAttempt) -> None:
        """Forget ``attempt`` if it is still the one registered for its quiz."""
        with self._lock:
            if self._attempts.get(attempt.quiz.id) is attempt:
                del self._attempts[attempt.quiz.id]
        attempt.close()

    def remove(self, quiz_id: str) -> None:
        with self._lock:
            attempt = self._attempts.pop(quiz_id, None)
        if attempt is None:
            raise NotFoundError(f"No open attempt for quiz {quiz_id}", status_code=404)
        attempt.close()

    def close_all(self) -> None:
        with self._lock:
            attempts = list(self._attempts.values())
            self._attempts.clear()
        for attempt in attempts:
            attempt.close()
        if attempts:
            log.info("Closed %s open attempt(s); progress stays saved", len(attempts))
