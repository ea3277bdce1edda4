import json

from quizdesk.models import AttemptState, SessionState
from quizdesk.session import QuizAttempt, SessionStore, progress_key
from quizdesk.storage import JsonFileStorage


def test_load_without_snapshot_is_none(quiz, storage) -> None:
    assert SessionStore(storage).load(quiz) is None


def test_load_or_create_starts_with_full_duration(quiz, storage) -> None:
    state, resumed = SessionStore(storage).load_or_create(quiz)
    assert not resumed
    assert state.time_left == 60
    assert state.current_question == 0
    assert state.answers == {}


def test_save_and_resume(quiz, storage) -> None:
    store = SessionStore(storage)
    store.save(SessionState(quiz_id=quiz.id, current_question=1, answers={"q1": 3}, time_left=15))
    assert json.loads(storage.get("quiz_progress_quiz1"))["timeLeft"] == 15

    state, resumed = store.load_or_create(quiz)
    assert resumed
    assert state.time_left == 15
    assert state.current_question == 1
    assert state.answers == {"q1": 3}


def test_snapshot_for_another_quiz_is_ignored(quiz, storage) -> None:
    storage.set(progress_key(quiz.id), json.dumps({"quizId": "other", "currentQuestion": 0, "timeLeft": 5}))
    assert SessionStore(storage).load(quiz) is None


def test_corrupt_snapshot_is_ignored(quiz, storage, caplog) -> None:
    storage.set(progress_key(quiz.id), "{not json")
    with caplog.at_level("WARNING"):
        state, resumed = SessionStore(storage).load_or_create(quiz)
    assert not resumed
    assert state.time_left == 60
    assert "unreadable progress" in caplog.text


def test_current_question_is_clamped(quiz, storage) -> None:
    storage.set(progress_key(quiz.id), json.dumps({"quizId": quiz.id, "currentQuestion": 9, "timeLeft": 5}))
    assert SessionStore(storage).load(quiz).current_question == 1


def test_clear_and_saved_quiz_ids(quiz, storage) -> None:
    store = SessionStore(storage)
    store.save(SessionState(quiz_id="quiz1", time_left=1))
    store.save(SessionState(quiz_id="quiz9", time_left=1))
    storage.set("token", "t")
    assert store.saved_quiz_ids() == ["quiz1", "quiz9"]
    store.clear("quiz1")
    assert store.saved_quiz_ids() == ["quiz9"]


def test_undecodable_progress_file_starts_fresh(quiz, client, tmp_path, rng, caplog) -> None:
    (tmp_path / "quiz_progress_quiz1.json").write_bytes(b"\xff\xfe{garbage")
    with caplog.at_level("WARNING"):
        attempt = QuizAttempt(quiz, client, JsonFileStorage(tmp_path), rng=rng).start(run_timer=False)
    assert attempt.state is AttemptState.IN_PROGRESS
    assert not attempt.resumed
    assert attempt.session.time_left == 60
    assert "unreadable progress" in caplog.text
    assert json.loads((tmp_path / "quiz_progress_quiz1.json").read_text(encoding="utf-8"))["timeLeft"] == 60


def _order(*indexes: int) -> list[dict]:
    return [{"option": str(index + 1), "originalIndex": index} for index in indexes]


def test_option_order_outside_the_question_is_ignored(quiz, storage, caplog) -> None:
    storage.set(
        progress_key(quiz.id),
        json.dumps(
            {
                "quizId": quiz.id,
                "currentQuestion": 0,
                "timeLeft": 30,
                "shuffledOptions": {"q1": _order(0, 1, 2, 9), "q2": _order(1, 0)},
            }
        ),
    )
    with caplog.at_level("WARNING"):
        assert SessionStore(storage).load(quiz) is None
    assert "does not match its options" in caplog.text


def test_option_order_missing_a_question_is_ignored(quiz, storage) -> None:
    storage.set(
        progress_key(quiz.id),
        json.dumps(
            {"quizId": quiz.id, "currentQuestion": 0, "timeLeft": 30, "shuffledOptions": {"q1": _order(3, 1, 0, 2)}}
        ),
    )
    state, resumed = SessionStore(storage).load_or_create(quiz)
    assert not resumed
    assert state.time_left == 60
    assert state.shuffled_options == {}


def test_complete_option_order_is_resumed(quiz, storage) -> None:
    storage.set(
        progress_key(quiz.id),
        json.dumps(
            {
                "quizId": quiz.id,
                "currentQuestion": 0,
                "timeLeft": 30,
                "shuffledOptions": {"q1": _order(3, 1, 0, 2), "q2": _order(1, 0)},
            }
        ),
    )
    state = SessionStore(storage).load(quiz)
    assert [item.original_index for item in state.shuffled_options["q1"]] == [3, 1, 0, 2]
