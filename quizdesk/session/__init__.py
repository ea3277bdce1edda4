"""Quiz-taking session engine."""
from quizdesk.session.attempt import DisplayedOption, HintView, QuestionView, QuizAttempt
from quizdesk.session.dispatcher import SubmissionDispatcher
from quizdesk.session.shuffler import ensure_shuffled, shuffle_question_options
from quizdesk.session.store import SessionStore, fresh_state, progress_key
from quizdesk.session.timer import QuizTimer

__all__ = [
    "DisplayedOption",
    "HintView",
    "QuestionView",
    "QuizAttempt",
    "QuizTimer",
    "SessionStore",
    "SubmissionDispatcher",
    "ensure_shuffled",
    "fresh_state",
    "progress_key",
    "shuffle_question_options",
]
