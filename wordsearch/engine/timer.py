"""Cancellable once-per-interval ticker driving session time."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class GameTimer:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread.

    ``cancel`` does not wait for the thread: a tick already in flight may
    still be delivered, so callbacks must check their own state. Call
    ``join`` after ``cancel`` to wait for it. A cancelled timer cannot be
    restarted; build a new one instead.
    """

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="wordsearch-timer", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the ticker thread to exit. A no-op from the ticker thread itself."""

        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout)

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                LOGGER.exception("Timer callback failed; stopping timer")
                self._stopped.set()
