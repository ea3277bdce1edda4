import random

import pytest

from quizdesk.client.models import CodeDistractors
from quizdesk.code_blanks import build_code_template, build_drag_drop_question, extract_blanks


def test_markers_become_numbered_placeholders() -> None:
    template, blanks = build_code_template("for **item** in **items**:\n    print(item)")
    assert template == "for ___BLANK_0___ in ___BLANK_1___:\n    print(item)"
    assert [blank["correctAnswer"] for blank in blanks] == ["item", "items"]
    assert blanks[1] == {"id": 1, "correctAnswer": "items", "placeholder": "___BLANK_1___", "points": 1}


def test_code_without_markers_is_rejected() -> None:
    assert extract_blanks("print(1)") == []
    with pytest.raises(ValueError, match="markers"):
        build_code_template("print(1)")


def test_drag_drop_question_mixes_answers_and_distractors() -> None:
    distractors = CodeDistractors(correctAnswers=["item", "items"], distractors=["range", "len"])
    question = build_drag_drop_question(
        "Complete the loop",
        "for **item** in **items**: pass",
        "python",
        distractors,
        rng=random.Random(3),
    )
    assert question["questionType"] == "CodeDragDrop"
    assert sorted(question["options"]) == ["item", "items", "len", "range"]
    assert question["codeTemplate"] == "for ___BLANK_0___ in ___BLANK_1___: pass"


def test_drag_drop_question_prefers_generated_option_order() -> None:
    distractors = CodeDistractors(correctAnswers=["a"], distractors=["b"], allOptions=["b", "a"])
    question = build_drag_drop_question("Fill", "x = **a**", "python", distractors)
    assert question["options"] == ["b", "a"]


def test_drag_drop_question_needs_text() -> None:
    with pytest.raises(ValueError):
        build_drag_drop_question("  ", "x = **a**", "python", CodeDistractors())
