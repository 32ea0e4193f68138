from __future__ import annotations

import logging
import threading
from typing import Callable, List

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class InflightCounter:
    """Process-wide count of outstanding tracked requests.

    Observers are zero-argument callables notified after every `start()` and
    `end()`, strictly after the mutation that triggered them. One instance is
    shared per process via the container; tests build their own.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._count = 0
        # a list, not a set: registering the same callable twice yields two calls
        self._observers: List[List[Observer]] = []

    def start(self) -> None:
        with self._lock:
            self._count += 1
        self._emit()

    def end(self) -> None:
        with self._lock:
            if self._count == 0:
                # clamped; an unmatched end usually means double-counted completion
                logger.warning("InflightCounter.end() called with no request in flight")
            self._count = max(0, self._count - 1)
        self._emit()

    def peek(self) -> int:
        return self._count

    def is_loading(self) -> bool:
        return self._count > 0

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register `observer`; return a function that removes this registration."""
        entry = [observer]
        with self._lock:
            self._observers.append(entry)

        def unsubscribe() -> None:
            with self._lock:
                for i, existing in enumerate(self._observers):
                    if existing is entry:
                        del self._observers[i]
                        return

        return unsubscribe

    def _emit(self) -> None:
        with self._lock:
            observers = [entry[0] for entry in self._observers]
        for observer in observers:
            try:
                observer()
            except Exception:
                logger.exception("InflightCounter observer %r failed", observer)
