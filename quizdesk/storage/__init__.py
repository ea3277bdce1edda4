"""Storage backends."""
from __future__ import annotations

from pathlib import Path

from quizdesk import config
from quizdesk.storage.base import KeyValueStorage
from quizdesk.storage.database import DatabaseStorage
from quizdesk.storage.json_file import JsonFileStorage
from quizdesk.storage.memory import MemoryStorage


def build_storage(
    backend: str | None = None,
    directory: Path | None = None,
    database_url: str | None = None,
) -> KeyValueStorage:
    """Create the storage backend named in configuration."""
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == "json":
        return JsonFileStorage(directory or config.PROGRESS_DIR)
    if backend == "database":
        return DatabaseStorage(database_url or config.DATABASE_URL)
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "DatabaseStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "build_storage",
]
