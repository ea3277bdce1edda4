from __future__ import annotations

from typing import Any, Iterable

from quizdesk.models import (
    AnswerValue,
    CodeBlank,
    CodeDragDropQuestion,
    CodeReference,
    EssayQuestion,
    FillInBlankQuestion,
    Hint,
    McqQuestion,
    Question,
    Quiz,
    SessionState,
    ShuffledOption,
    TrueFalseQuestion,
)


MCQ_TYPES = {"MCQ", "CodeSnippet", ""}
TRUE_FALSE_TYPE = "TrueFalse"
FILL_IN_BLANK_TYPE = "FillInBlank"
ESSAY_TYPE = "Essay"
CODE_DRAG_DROP_TYPE = "CodeDragDrop"


def _document_id(payload: dict[str, Any]) -> str:
    raw = payload.get("_id", payload.get("id"))
    if raw is None or raw == "":
        raise ValueError("Payload is missing an identifier")
    return str(raw)


def _optional_index(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return None


def _text(value: object) -> str:
    return "" if value is None else str(value)


def _options(payload: dict[str, Any]) -> list[str]:
    options = payload.get("options") or []
    if not isinstance(options, list):
        raise ValueError("Question options must be a list")
    return [_text(option) for option in options]


def deserialize_question(payload: dict[str, Any]) -> Question:
    """Build the question variant named by ``questionType``."""
    question_id = _document_id(payload)
    text = _text(payload.get("question"))
    explanation = _text(payload.get("explanation"))
    difficulty = payload.get("difficulty")
    question_type = _text(payload.get("questionType"))

    if question_type in MCQ_TYPES:
        return McqQuestion(
            id=question_id,
            text=text,
            options=_options(payload),
            correct_answer=_optional_index(payload.get("correctAnswer")),
            explanation=explanation,
            difficulty=difficulty,
        )
    if question_type == TRUE_FALSE_TYPE:
        return TrueFalseQuestion(
            id=question_id,
            text=text,
            options=_options(payload) or ["True", "False"],
            correct_answer=_optional_index(payload.get("correctAnswer")),
            explanation=explanation,
            difficulty=difficulty,
        )
    if question_type == FILL_IN_BLANK_TYPE:
        correct = payload.get("correctAnswer")
        return FillInBlankQuestion(
            id=question_id,
            text=text,
            correct_answer=None if correct is None else _text(correct),
            explanation=explanation,
            difficulty=difficulty,
        )
    if question_type == ESSAY_TYPE:
        hints = [
            Hint(text=_text(hint.get("text")), point_penalty=int(hint.get("pointPenalty", 1)))
            for hint in payload.get("hints") or []
            if isinstance(hint, dict)
        ]
        return EssayQuestion(
            id=question_id,
            text=text,
            hints=hints,
            explanation=explanation,
            difficulty=difficulty,
        )
    if question_type == CODE_DRAG_DROP_TYPE:
        blanks = [
            CodeBlank(
                id=int(blank.get("id", index)),
                placeholder=_text(blank.get("placeholder") or f"___BLANK_{index}___"),
                correct_answer=blank.get("correctAnswer"),
                points=int(blank.get("points", 1)),
            )
            for index, blank in enumerate(payload.get("blanks") or [])
            if isinstance(blank, dict)
        ]
        return CodeDragDropQuestion(
            id=question_id,
            text=text,
            language=_text(payload.get("language") or "javascript"),
            code_template=_text(payload.get("codeTemplate")),
            blanks=blanks,
            options=_options(payload),
            explanation=explanation,
            difficulty=difficulty,
        )
    raise ValueError(f"Unsupported question type: {question_type}")


def deserialize_quiz(payload: dict[str, Any]) -> Quiz:
    """Convert the backend quiz document into a :class:`Quiz`."""
    if not isinstance(payload, dict):
        raise ValueError("Quiz payload must be an object")
    questions = payload.get("questions") or []
    if not isinstance(questions, list):
        raise ValueError("Quiz questions must be a list")

    code_reference = None
    reference = payload.get("codeReference")
    if isinstance(reference, dict) and reference.get("code"):
        code_reference = CodeReference(
            language=_text(reference.get("language") or "javascript"),
            code=_text(reference.get("code")),
            show_to_students=bool(reference.get("showToStudents")),
        )

    try:
        duration = int(payload.get("duration") or 0)
    except (TypeError, ValueError) as exc:
        raise ValueError("Quiz duration must be a number of minutes") from exc

    return Quiz(
        id=_document_id(payload),
        title=_text(payload.get("title")),
        duration=duration,
        questions=[deserialize_question(item) for item in questions],
        description=_text(payload.get("description")),
        quiz_code=payload.get("quizCode"),
        code_reference=code_reference,
        results_shared=bool(payload.get("resultsShared", False)),
        start_date=payload.get("startDate"),
        end_date=payload.get("endDate"),
    )


def _serialize_answer(value: AnswerValue) -> AnswerValue:
    if isinstance(value, dict):
        return {str(key): token for key, token in value.items()}
    return value


def _deserialize_answer(value: object) -> AnswerValue:
    if isinstance(value, bool):
        raise ValueError("Answer must not be a boolean")
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, dict):
        return {str(key): _text(token) for key, token in value.items()}
    raise ValueError(f"Unsupported answer value: {value!r}")


def serialize_session_state(state: SessionState) -> dict[str, Any]:
    """Snapshot layout stored under ``quiz_progress_<quizId>``."""
    return {
        "quizId": state.quiz_id,
        "currentQuestion": state.current_question,
        "answers": {
            question_id: _serialize_answer(value)
            for question_id, value in state.answers.items()
        },
        "timeLeft": state.time_left,
        "shuffledOptions": {
            question_id: [
                {"option": item.option, "originalIndex": item.original_index}
                for item in items
            ]
            for question_id, items in state.shuffled_options.items()
        },
        "hintsUnlocked": {
            question_id: list(indexes)
            for question_id, indexes in state.hints_unlocked.items()
        },
    }


def deserialize_session_state(payload: object) -> SessionState:
    """Parse a stored snapshot. Raises ``ValueError`` on any malformed field."""
    if not isinstance(payload, dict):
        raise ValueError("Snapshot must be an object")
    quiz_id = payload.get("quizId")
    if not isinstance(quiz_id, str) or not quiz_id:
        raise ValueError("Snapshot is missing quizId")

    current = payload.get("currentQuestion", 0)
    time_left = payload.get("timeLeft")
    if isinstance(current, bool) or not isinstance(current, int) or current < 0:
        raise ValueError("Invalid currentQuestion")
    if isinstance(time_left, bool) or not isinstance(time_left, int) or time_left < 0:
        raise ValueError("Invalid timeLeft")

    answers = payload.get("answers") or {}
    shuffled = payload.get("shuffledOptions") or {}
    hints = payload.get("hintsUnlocked") or {}
    if not isinstance(answers, dict) or not isinstance(shuffled, dict) or not isinstance(hints, dict):
        raise ValueError("Snapshot maps must be objects")

    shuffled_options: dict[str, list[ShuffledOption]] = {}
    for question_id, items in shuffled.items():
        if not isinstance(items, list):
            raise ValueError("Shuffled options must be lists")
        shuffled_options[str(question_id)] = [
            ShuffledOption(option=_text(item["option"]), original_index=int(item["originalIndex"]))
            for item in _require_dicts(items)
        ]

    return SessionState(
        quiz_id=quiz_id,
        current_question=current,
        answers={str(key): _deserialize_answer(value) for key, value in answers.items()},
        time_left=time_left,
        shuffled_options=shuffled_options,
        hints_unlocked={
            str(key): [int(index) for index in value]
            for key, value in hints.items()
            if isinstance(value, list)
        },
    )


def _require_dicts(items: Iterable[object]) -> list[dict[str, Any]]:
    result = []
    for item in items:
        if not isinstance(item, dict) or "option" not in item or "originalIndex" not in item:
            raise ValueError("Malformed shuffled option entry")
        result.append(item)
    return result


def serialize_answer_records(
    quiz: Quiz,
    answers: dict[str, AnswerValue],
    hints_unlocked: dict[str, list[int]] | None = None,
) -> list[dict[str, Any]]:
    """Ordered ``{questionId, selectedAnswer, hintsUsed}`` list for answered questions."""
    hints_unlocked = hints_unlocked or {}
    records = []
    for question in quiz.questions:
        if question.id not in answers:
            continue
        records.append(
            {
                "questionId": question.id,
                "selectedAnswer": _serialize_answer(answers[question.id]),
                "hintsUsed": list(hints_unlocked.get(question.id, [])),
            }
        )
    return records
