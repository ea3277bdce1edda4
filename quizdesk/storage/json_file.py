"""File-per-key storage under a data directory."""
from __future__ import annotations

import logging
from pathlib import Path

from quizdesk.utils import validate_id

log = logging.getLogger(__name__)

SUFFIX = ".json"


class JsonFileStorage:
    """Stores each key as ``<directory>/<key>.json``.

    Values are written verbatim (they are JSON documents already) and
    replaced atomically so a crash mid-write never leaves a torn snapshot.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{validate_id('key', key)}{SUFFIX}"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_name(f".{path.name}.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def clear(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
            log.debug("Removed %s", path.name)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(
            path.stem
            for path in self.directory.glob(f"{prefix}*{SUFFIX}")
            if not path.name.startswith(".")
        )
