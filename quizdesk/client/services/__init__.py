"""Backend resource services."""
from quizdesk.client.services import (
    auth_service,
    group_service,
    quiz_service,
    submission_service,
)

__all__ = ["auth_service", "group_service", "quiz_service", "submission_service"]
