import random

from quizdesk.models import SessionState
from quizdesk.session import ensure_shuffled, shuffle_question_options


def test_every_choice_question_gets_a_permutation(mixed_quiz, rng) -> None:
    shuffled = shuffle_question_options(mixed_quiz, rng)
    assert set(shuffled) == {"m1", "c1"}
    for question_id, items in shuffled.items():
        question = mixed_quiz.question(question_id)
        assert sorted(item.original_index for item in items) == list(range(len(question.options)))
        for item in items:
            assert question.options[item.original_index] == item.option


def test_shuffle_depends_on_the_random_source(quiz) -> None:
    orders = {
        tuple(item.original_index for item in shuffle_question_options(quiz, random.Random(seed))["q1"])
        for seed in range(30)
    }
    assert len(orders) > 1


def test_ensure_shuffled_keeps_an_existing_mapping(quiz, rng) -> None:
    state = SessionState(quiz_id=quiz.id, time_left=60)
    assert ensure_shuffled(state, quiz, rng)
    first = state.shuffled_options
    assert not ensure_shuffled(state, quiz, random.Random(99))
    assert state.shuffled_options is first
