"""Authentication and student directory calls."""
import logging
from typing import Any

from quizdesk.client.http import QuizApiClient
from quizdesk.client.models import AuthResponse, StudentSummary, UserLogin, UserRegister

log = logging.getLogger(__name__)


def login(client: QuizApiClient, email: str, password: str) -> AuthResponse:
    """Log in and persist the issued token."""
    payload = UserLogin(email=email, password=password)
    response = AuthResponse.model_validate(
        client.post("/auth/login", json=payload.model_dump())
    )
    client.store_credentials(response.token, response.user.model_dump(by_alias=True))
    log.info("Logged in as %s (%s)", response.user.email, response.user.role)
    return response


def register(client: QuizApiClient, name: str, email: str, password: str) -> AuthResponse:
    """Register a student account and persist the issued token."""
    payload = UserRegister(name=name, email=email, password=password)
    response = AuthResponse.model_validate(
        client.post("/auth/register", json=payload.model_dump(mode="json"))
    )
    client.store_credentials(response.token, response.user.model_dump(by_alias=True))
    return response


def logout(client: QuizApiClient) -> None:
    """Forget stored credentials. The backend keeps no session to end."""
    client.clear_credentials()


def get_all_students(client: QuizApiClient) -> list[StudentSummary]:
    data = client.get("/auth/students") or {}
    return [StudentSummary.model_validate(item) for item in data.get("students", [])]


def get_student_performance(client: QuizApiClient, student_id: str) -> dict[str, Any]:
    return client.get(f"/auth/students/{student_id}/performance") or {}
