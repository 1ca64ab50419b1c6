import threading
from collections.abc import Callable

ProgressCallback = Callable[[int], None]


class ProgressReporter:
    """Delivers an ordered, non-decreasing 0-100 progress stream for one file.

    Regressions and repeats are dropped; delivery is serialized so a backend
    reporting from worker threads cannot interleave callbacks.
    """

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._last: int | None = None

    @property
    def last(self) -> int | None:
        return self._last

    def report(self, percent: int) -> None:
        value = max(0, min(100, int(percent)))
        with self._lock:
            if self._last is not None and value <= self._last:
                return
            self._last = value
            if self._callback is not None:
                self._callback(value)

    def finish(self) -> None:
        self.report(100)
