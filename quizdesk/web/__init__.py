"""Local web player for taking quizzes in a browser."""
from quizdesk.web.app import app

__all__ = ["app"]
