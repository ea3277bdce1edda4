"""Shared objects injected into the web player routes."""
from functools import lru_cache

from quizdesk import config
from quizdesk.client import QuizApiClient
from quizdesk.storage import KeyValueStorage, build_storage
from quizdesk.web.registry import AttemptRegistry


@lru_cache
def get_storage() -> KeyValueStorage:
    """Storage for progress and the bearer token, shared with the CLI."""
    return build_storage(config.STORAGE_BACKEND)


@lru_cache
def get_client() -> QuizApiClient:
    return QuizApiClient(base_url=config.API_URL, storage=get_storage())


@lru_cache
def get_registry() -> AttemptRegistry:
    return AttemptRegistry()
