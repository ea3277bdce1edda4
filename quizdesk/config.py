"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float_env(name: str, default: float) -> float:
    """Parse float from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Backend
API_URL = os.environ.get("QUIZDESK_API_URL", "http://localhost:3040/api").rstrip("/")
REQUEST_TIMEOUT_SECONDS = _parse_int_env("QUIZDESK_TIMEOUT_SECONDS", 30)
UPLOAD_TIMEOUT_SECONDS = _parse_int_env("QUIZDESK_UPLOAD_TIMEOUT_SECONDS", 120)

# Directories
DATA_DIR = Path(os.environ.get("QUIZDESK_DATA_DIR", Path.cwd() / "data"))
PROGRESS_DIR = Path(os.environ.get("QUIZDESK_PROGRESS_DIR", DATA_DIR / "progress"))

# Storage
STORAGE_BACKEND = os.environ.get("QUIZDESK_STORAGE", "json").lower()
DATABASE_URL = os.environ.get(
    "QUIZDESK_DATABASE_URL", f"sqlite:///{DATA_DIR / 'quizdesk.db'}"
)

# Logging
LOG_LEVEL = os.environ.get("QUIZDESK_LOG_LEVEL", "INFO").upper()

# Local web player
HOST = os.environ.get("QUIZDESK_HOST", "127.0.0.1")
PORT = _parse_int_env("QUIZDESK_PORT", 8000)

# Attempts
PROGRESS_KEY_PREFIX = "quiz_progress_"
TOKEN_KEY = "token"
USER_KEY = "user"
TICK_SECONDS = _parse_float_env("QUIZDESK_TICK_SECONDS", 1.0)
LOW_TIME_WARNING_SECONDS = 60
PASS_PERCENTAGE = 50.0

# Admin listings
DEFAULT_PAGE_SIZE = 10
QUESTIONS_PAGE_SIZE = 15
FLAG_STATUSES = ("pending", "reviewed", "resolved", "rejected")
DIFFICULTIES = ("Easy", "Medium", "Hard")
