"""Per-attempt option shuffling."""
from __future__ import annotations

import random

from quizdesk.models import Quiz, SessionState, ShuffledOption, question_options


def shuffle_question_options(quiz: Quiz, rng: random.Random | None = None) -> dict[str, list[ShuffledOption]]:
    """Permute every question's options, remembering each option's original index.

    Questions answered by typing (fill-in-the-blank, essay) get no entry.
    """
    rng = rng or random.Random()
    shuffled: dict[str, list[ShuffledOption]] = {}
    for question in quiz.questions:
        options = question_options(question)
        if not options:
            continue
        pairs = [ShuffledOption(option=option, original_index=index) for index, option in enumerate(options)]
        rng.shuffle(pairs)
        shuffled[question.id] = pairs
    return shuffled


def ensure_shuffled(state: SessionState, quiz: Quiz, rng: random.Random | None = None) -> bool:
    """Fill ``state.shuffled_options`` once. Returns False when a mapping already exists."""
    if state.shuffled_options:
        return False
    state.shuffled_options = shuffle_question_options(quiz, rng)
    return True
