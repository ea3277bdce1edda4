import json
import random
import threading
from typing import Any

import pytest

from quizdesk.client import QuizApiClient
from quizdesk.serialization import deserialize_quiz
from quizdesk.storage import MemoryStorage


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self.content = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Answers ``request()`` from a ``(method, path) -> response`` table."""

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None):
        self.routes = dict(routes or {})
        self.calls: list[dict[str, Any]] = []
        self.closed = False
        self._lock = threading.Lock()

    def request(self, method, url, params=None, json=None, data=None, files=None, headers=None, timeout=None):
        path = url.split("/api", 1)[-1]
        with self._lock:
            self.calls.append(
                {
                    "method": method,
                    "path": path,
                    "params": params,
                    "json": json,
                    "data": data,
                    "files": files,
                    "headers": headers or {},
                }
            )
        reply = self.routes.get((method, path))
        if reply is None:
            return FakeResponse({"message": "Not found"}, status_code=404, reason="Not Found")
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply()
        return reply

    def calls_to(self, method: str, path: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["method"] == method and call["path"] == path]

    def close(self) -> None:
        self.closed = True


QUIZ_PAYLOAD = {
    "_id": "quiz1",
    "title": "Python basics",
    "description": "Warm-up",
    "duration": 1,
    "quizCode": "ABC123",
    "questions": [
        {
            "_id": "q1",
            "question": "What does `len([1, 2])` return?",
            "options": ["1", "2", "3", "4"],
            "correctAnswer": 1,
            "questionType": "MCQ",
        },
        {
            "_id": "q2",
            "question": "Python is dynamically typed.",
            "questionType": "TrueFalse",
            "options": ["True", "False"],
        },
    ],
}

MIXED_QUIZ_PAYLOAD = {
    "_id": "quiz2",
    "title": "Mixed",
    "duration": 10,
    "questions": [
        {"_id": "m1", "question": "Pick one", "options": ["a", "b", "c"]},
        {"_id": "f1", "question": "Capital of France?", "questionType": "FillInBlank", "correctAnswer": "Paris"},
        {
            "_id": "e1",
            "question": "Explain generators.",
            "questionType": "Essay",
            "hints": [{"text": "Think about yield", "pointPenalty": 2}, {"text": "Lazy evaluation"}],
        },
        {
            "_id": "c1",
            "question": "Complete the code",
            "questionType": "CodeDragDrop",
            "language": "python",
            "codeTemplate": "for ___BLANK_0___ in ___BLANK_1___:",
            "blanks": [
                {"id": 0, "placeholder": "___BLANK_0___", "correctAnswer": "x"},
                {"id": 1, "placeholder": "___BLANK_1___", "correctAnswer": "items"},
            ],
            "options": ["x", "items", "range", "y"],
        },
    ],
}

SUBMISSION_REPLY = {
    "message": "Quiz submitted successfully",
    "result": {
        "score": 1,
        "totalQuestions": 2,
        "percentage": 50,
        "isPractice": False,
        "attemptNumber": 1,
        "detailedResults": [
            {
                "questionId": "q1",
                "question": "What does `len([1, 2])` return?",
                "options": ["1", "2", "3", "4"],
                "selectedAnswer": 1,
                "correctAnswer": 1,
                "isCorrect": True,
            },
            {
                "questionId": "q2",
                "question": "Python is dynamically typed.",
                "options": ["True", "False"],
                "selectedAnswer": None,
                "correctAnswer": 0,
                "isCorrect": False,
                "explanation": "Types are checked at runtime.",
            },
        ],
    },
}


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession(
        {
            ("GET", "/quiz/code/ABC123"): FakeResponse(QUIZ_PAYLOAD),
            ("POST", "/submission"): FakeResponse(SUBMISSION_REPLY),
        }
    )


@pytest.fixture
def client(session: FakeSession, storage: MemoryStorage) -> QuizApiClient:
    return QuizApiClient(base_url="http://backend.test/api", storage=storage, session=session)


@pytest.fixture
def quiz():
    return deserialize_quiz(QUIZ_PAYLOAD)


@pytest.fixture
def mixed_quiz():
    return deserialize_quiz(MIXED_QUIZ_PAYLOAD)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)
