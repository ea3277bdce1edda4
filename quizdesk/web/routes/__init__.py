"""Web player route modules."""
from quizdesk.web.routes import attempts, health

__all__ = ["attempts", "health"]
