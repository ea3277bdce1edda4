import json

import pytest

from conftest import FakeResponse
from quizdesk import cli
from quizdesk.errors import NotFoundError, QuizNotStartedError
from quizdesk.models import AttemptState
from quizdesk.session import QuizAttempt


@pytest.fixture
def run(client, storage, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cli, "build_storage", lambda backend: storage)
    monkeypatch.setattr(cli, "QuizApiClient", lambda base_url, storage: client)

    def _run(*argv: str) -> int:
        return cli.main(["--storage", "memory", *argv])

    return _run


def _scripted(*lines: str):
    answers = iter(lines)
    return lambda prompt="": next(answers)


def test_run_take_answers_and_submits(quiz, client, session, storage, rng) -> None:
    attempt = QuizAttempt(quiz, client, storage, rng=rng).start(run_timer=False)
    output: list[str] = []

    result = cli.run_take(attempt, _scripted("A", "s", "n", "t 1", "B", "s"), output.append)

    assert result is not None
    assert attempt.state is AttemptState.COMPLETED
    assert any("Please answer all questions" in line for line in output)
    assert "Choice answers are option indexes" in output
    assert len(session.calls_to("POST", "/submission")) == 1


def test_run_take_quit_keeps_progress(quiz, client, storage, rng) -> None:
    attempt = QuizAttempt(quiz, client, storage, rng=rng).start(run_timer=False)
    output: list[str] = []
    assert cli.run_take(attempt, _scripted("C", "q"), output.append) is None
    assert attempt.state is AttemptState.IN_PROGRESS
    assert json.loads(storage.get("quiz_progress_quiz1"))["answers"]
    assert "Progress saved" in output[-1]


def test_run_take_fills_code_blanks_and_typed_answers(mixed_quiz, client, storage, rng) -> None:
    attempt = QuizAttempt(mixed_quiz, client, storage, rng=rng).start(run_timer=False)
    output: list[str] = []

    script = _scripted("g 4", "t 0=x, 1=items", "g 2", "t Paris", "q")
    assert cli.run_take(attempt, script, output.append) is None

    assert attempt.session.answers == {"c1": {"0": "x", "1": "items"}, "f1": "Paris"}
    assert "   Blank 0: x" in output
    assert "   Blank 1: items" in output
    assert "   Your answer: [none]" in output
    assert "   Your answer: Paris" in output


def test_load_error_messages() -> None:
    assert "hasn't started" in cli.load_error_message(QuizNotStartedError("x", start_date="2030-01-01T09:00:00Z"))
    assert "2030-01-01 09:00" in cli.load_error_message(QuizNotStartedError("x", start_date="2030-01-01T09:00:00Z"))
    assert cli.load_error_message(NotFoundError("Quiz not found")) == "Quiz not found"


def test_take_with_unknown_code_exits_1(run, capsys) -> None:
    assert run("take", "NOPE") == 1
    assert "Not found" in capsys.readouterr().err


def test_quizzes_list(run, session, capsys) -> None:
    session.routes[("GET", "/quiz/list")] = FakeResponse(
        [{"_id": "quiz1", "title": "Python basics", "quizCode": "ABC123"}]
    )
    assert run("quizzes", "list") == 0
    assert "ABC123" in capsys.readouterr().out


def test_login_then_logout(run, session, storage, capsys) -> None:
    session.routes[("POST", "/auth/login")] = FakeResponse(
        {"token": "jwt-1", "user": {"_id": "u1", "name": "Sam", "email": "sam@example.com", "role": "student"}}
    )
    assert run("login", "sam@example.com", "--password", "secret") == 0
    assert storage.get("token") == "jwt-1"
    assert run("logout") == 0
    assert storage.get("token") is None
    assert "Logged out" in capsys.readouterr().out


def test_progress_list_and_clear(run, storage, capsys) -> None:
    storage.set("quiz_progress_quiz1", "{}")
    assert run("progress", "list") == 0
    assert "quiz1" in capsys.readouterr().out
    assert run("progress", "clear", "quiz1") == 0
    assert storage.get("quiz_progress_quiz1") is None


def test_create_without_source_reports_validation_error(run, capsys) -> None:
    assert run("create", "Empty quiz") == 2
    assert "Please provide a PDF file, URL, or select existing quizzes" in capsys.readouterr().err


def test_leaderboard_overall(run, session, capsys) -> None:
    session.routes[("GET", "/quiz/leaderboard/overall")] = FakeResponse(
        {
            "leaderboard": [
                {"rank": 1, "userId": "u1", "userName": "Sam", "totalQuizzes": 3, "averagePercentage": 91.5}
            ],
            "totalUsers": 1,
        }
    )
    assert run("leaderboard") == 0
    out = capsys.readouterr().out
    assert "Sam" in out
    assert "91.5% avg over 3 quizzes" in out


def test_questions_with_filters_use_the_question_bank(run, session, capsys) -> None:
    session.routes[("GET", "/quiz/question-bank?search=loop&tags=python&page=1")] = FakeResponse(
        {"questions": [{"question": "What is a `for` loop?", "questionType": "MCQ"}]}
    )
    assert run("questions", "--search", "loop", "--tag", "python") == 0
    assert "[MCQ] What is a `for` loop?" in capsys.readouterr().out


def test_code_question_prints_a_drag_drop_document(run, session, tmp_path, capsys) -> None:
    snippet = tmp_path / "loop.py"
    snippet.write_text("for **item** in items: pass", encoding="utf-8")
    session.routes[("POST", "/quiz/generate-code-distractors")] = FakeResponse(
        {"correctAnswers": ["item"], "distractors": ["range"], "allOptions": ["range", "item"]}
    )
    assert run("code-question", "Complete the loop", str(snippet), "--language", "python") == 0
    document = json.loads(capsys.readouterr().out)
    assert document["codeTemplate"] == "for ___BLANK_0___ in items: pass"
    assert document["options"] == ["range", "item"]
    assert session.calls[-1]["json"] == {"codeSnippet": "for **item** in items: pass", "language": "python"}
