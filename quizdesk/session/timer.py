"""Repeating countdown tick on a background thread."""
from __future__ import annotations

import logging
import threading
from typing import Callable

from quizdesk import config

log = logging.getLogger(__name__)


class QuizTimer:
    """Calls ``on_tick`` every ``interval`` seconds until it returns False or ``stop()`` is called."""

    def __init__(
        self,
        on_tick: Callable[[], bool],
        interval: float | None = None,
        name: str = "quiz_timer",
    ) -> None:
        self._on_tick = on_tick
        self.interval = config.TICK_SECONDS if interval is None else interval
        self.name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Timer already started")
        self._thread = threading.Thread(target=self._worker, name=self.name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _worker(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                keep_going = self._on_tick()
            except Exception:
                log.exception("Timer tick failed; stopping %s", self.name)
                break
            if not keep_going:
                break
        self._stop.set()
