from __future__ import annotations

import threading

from network_graph.errors import CancellationError


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a worker thread.

    Strategies also report how far along they are through ``report_progress``;
    the reported fraction only ever grows.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._progress = 0.0

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancellationError("clustering run cancelled")

    @property
    def progress(self) -> float:
        return self._progress

    def report_progress(self, done: float, total: float) -> None:
        if total <= 0:
            return
        fraction = min(1.0, max(0.0, done / total))
        with self._lock:
            if fraction > self._progress:
                self._progress = fraction
