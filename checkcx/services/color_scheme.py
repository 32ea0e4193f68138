from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ColorSchemeQuery:
    """The OS `prefers-color-scheme: dark` media query."""

    @property
    def matches(self) -> bool:
        raise NotImplementedError

    def add_listener(self, listener: Listener) -> None:
        raise NotImplementedError

    def remove_listener(self, listener: Listener) -> None:
        raise NotImplementedError


class StaticColorSchemeQuery(ColorSchemeQuery):
    """Color-scheme source whose value is pushed in by the host.

    The server holds one as its default when a request carries no
    `Sec-CH-Prefers-Color-Scheme` hint; tests use it to simulate the OS
    switching between light and dark.
    """

    def __init__(self, prefers_dark: bool = False):
        self._lock = threading.Lock()
        self._prefers_dark = bool(prefers_dark)
        self._listeners: List[Listener] = []

    @property
    def matches(self) -> bool:
        return self._prefers_dark

    def set_prefers_dark(self, value: bool) -> None:
        value = bool(value)
        with self._lock:
            if value == self._prefers_dark:
                return
            self._prefers_dark = value
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                logger.exception("Color scheme listener %r failed", listener)

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)


def prefers_dark_from_client_hint(header: Optional[str]) -> Optional[bool]:
    """Map a `Sec-CH-Prefers-Color-Scheme` header value to True/False/None."""
    if not header:
        return None
    value = header.strip().strip('"').lower()
    if value == "dark":
        return True
    if value == "light":
        return False
    return None
