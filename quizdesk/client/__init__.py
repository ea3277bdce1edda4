"""Backend API client."""
from quizdesk.client.http import QuizApiClient

__all__ = ["QuizApiClient"]
