from __future__ import annotations

import threading
from typing import Hashable

from ..core.constants import DEFAULT_DOUBLE_SUBMIT_WINDOW_SECONDS


class DuplicateSubmitGuard:
    """Ignore a second submission of the same code inside a short window.

    State lives in the process, keyed by submitter, so two requests sent with
    the same session cookie still see each other. Only accepted submissions
    move the state forward.
    """

    def __init__(self, window_seconds: float = DEFAULT_DOUBLE_SUBMIT_WINDOW_SECONDS):
        self._window = float(window_seconds)
        self._last: dict[Hashable, tuple[str, float]] = {}
        self._lock = threading.Lock()

    @property
    def window_seconds(self) -> float:
        return self._window

    def check(self, submitter: Hashable, code: str, now_ts: float) -> bool:
        with self._lock:
            last = self._last.get(submitter)
            if last and last[0] == code and 0 <= now_ts - last[1] < self._window:
                return False
            self._last[submitter] = (code, now_ts)
            return True
