"""Key/value storage interface used for attempt progress and auth tokens."""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorage(Protocol):
    """String key/value store with the semantics of browser ``localStorage``."""

    def get(self, key: str) -> str | None:
        """Return the stored value or ``None`` when the key is missing."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def clear(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """List stored keys starting with ``prefix``."""
        ...
