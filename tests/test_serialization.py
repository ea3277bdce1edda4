import pytest

from conftest import MIXED_QUIZ_PAYLOAD, QUIZ_PAYLOAD
from quizdesk.models import (
    CodeDragDropQuestion,
    EssayQuestion,
    FillInBlankQuestion,
    McqQuestion,
    SessionState,
    ShuffledOption,
    TrueFalseQuestion,
)
from quizdesk.serialization import (
    deserialize_question,
    deserialize_quiz,
    deserialize_session_state,
    serialize_answer_records,
    serialize_session_state,
)


def test_deserialize_quiz_builds_each_question_variant() -> None:
    quiz = deserialize_quiz(MIXED_QUIZ_PAYLOAD)
    assert quiz.id == "quiz2"
    assert quiz.duration == 10
    assert [type(question) for question in quiz.questions] == [
        McqQuestion,
        FillInBlankQuestion,
        EssayQuestion,
        CodeDragDropQuestion,
    ]
    essay = quiz.questions[2]
    assert essay.hints[0].point_penalty == 2
    assert essay.hints[1].point_penalty == 1
    code = quiz.questions[3]
    assert [blank.id for blank in code.blanks] == [0, 1]
    assert code.language == "python"


def test_missing_question_type_and_code_snippet_parse_as_mcq() -> None:
    untyped = deserialize_question({"_id": "a", "question": "?", "options": ["x", "y"]})
    snippet = deserialize_question({"_id": "b", "question": "?", "options": ["x"], "questionType": "CodeSnippet"})
    assert isinstance(untyped, McqQuestion)
    assert isinstance(snippet, McqQuestion)


def test_true_false_defaults_its_options() -> None:
    question = deserialize_question({"_id": "t", "question": "?", "questionType": "TrueFalse"})
    assert isinstance(question, TrueFalseQuestion)
    assert question.options == ["True", "False"]


def test_correct_answer_is_parsed_when_leaked() -> None:
    quiz = deserialize_quiz(QUIZ_PAYLOAD)
    assert quiz.questions[0].correct_answer == 1
    assert quiz.questions[1].correct_answer is None


def test_unknown_question_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        deserialize_question({"_id": "z", "questionType": "Matching"})


def test_quiz_without_id_is_rejected() -> None:
    with pytest.raises(ValueError):
        deserialize_quiz({"title": "no id", "questions": []})


def test_session_state_snapshot_layout() -> None:
    state = SessionState(
        quiz_id="quiz1",
        current_question=1,
        answers={"q1": 2, "c1": {"0": "x"}},
        time_left=42,
        shuffled_options={"q1": [ShuffledOption("b", 1), ShuffledOption("a", 0)]},
        hints_unlocked={"e1": [0]},
    )
    payload = serialize_session_state(state)
    assert payload == {
        "quizId": "quiz1",
        "currentQuestion": 1,
        "answers": {"q1": 2, "c1": {"0": "x"}},
        "timeLeft": 42,
        "shuffledOptions": {
            "q1": [{"option": "b", "originalIndex": 1}, {"option": "a", "originalIndex": 0}]
        },
        "hintsUnlocked": {"e1": [0]},
    }
    assert deserialize_session_state(payload) == state


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"currentQuestion": 0, "timeLeft": 10},
        {"quizId": "quiz1", "currentQuestion": -1, "timeLeft": 10},
        {"quizId": "quiz1", "currentQuestion": 0, "timeLeft": "soon"},
        {"quizId": "quiz1", "currentQuestion": 0, "timeLeft": 10, "answers": {"q1": [1]}},
        {"quizId": "quiz1", "currentQuestion": 0, "timeLeft": 10, "shuffledOptions": {"q1": [{"option": "a"}]}},
    ],
)
def test_malformed_snapshots_raise_value_error(payload) -> None:
    with pytest.raises(ValueError):
        deserialize_session_state(payload)


def test_answer_records_follow_quiz_order_and_skip_unanswered() -> None:
    quiz = deserialize_quiz(MIXED_QUIZ_PAYLOAD)
    records = serialize_answer_records(
        quiz,
        {"c1": {"0": "x"}, "m1": 2, "e1": "Generators yield lazily."},
        {"e1": [0, 1]},
    )
    assert records == [
        {"questionId": "m1", "selectedAnswer": 2, "hintsUsed": []},
        {"questionId": "e1", "selectedAnswer": "Generators yield lazily.", "hintsUsed": [0, 1]},
        {"questionId": "c1", "selectedAnswer": {"0": "x"}, "hintsUsed": []},
    ]
