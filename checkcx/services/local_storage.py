"""String key/value storage shared by browsing-context-like consumers.

Every mutation emits a `StorageEvent` to all listeners; the event's `source`
names the writer so a context can ignore its own writes, like the browser's
`storage` event which only fires in *other* windows.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageEvent:
    key: str
    old_value: Optional[str]
    new_value: Optional[str]
    source: Any = None


StorageListener = Callable[[StorageEvent], None]


class LocalStorage:
    """In-memory storage area. Thread-safe; listeners run outside the lock."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._lock = threading.RLock()
        self._items: Dict[str, str] = dict(initial or {})
        self._listeners: List[StorageListener] = []

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def set_item(self, key: str, value: str, source: Any = None) -> None:
        value = str(value)
        with self._lock:
            old = self._items.get(key)
            if old == value:
                return
            self._items[key] = value
            self._persist()
        self._emit(StorageEvent(key, old, value, source))

    def remove_item(self, key: str, source: Any = None) -> None:
        with self._lock:
            if key not in self._items:
                return
            old = self._items.pop(key)
            self._persist()
        self._emit(StorageEvent(key, old, None, source))

    def add_listener(self, listener: StorageListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                try:
                    self._listeners.remove(listener)
                except ValueError:
                    pass

        return remove

    def _persist(self) -> None:
        """Hook for durable subclasses; called under the lock after each mutation."""

    def _emit(self, event: StorageEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener %r failed for key %s", listener, event.key)


class FileLocalStorage(LocalStorage):
    """`LocalStorage` persisted as a JSON object at `path`.

    Writes replace the file atomically. Changes made by other processes are
    picked up by `refresh()`, which `start_watching()` runs on an interval.
    """

    def __init__(self, path: str):
        self.path = path
        self._sched: Optional[BackgroundScheduler] = None
        super().__init__(self._read_file())

    def _read_file(self) -> Dict[str, str]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except Exception:
            logger.exception("Could not read storage file %s; treating as empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold a JSON object; treating as empty", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _persist(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".storage-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._items, f, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def refresh(self) -> List[StorageEvent]:
        """Reload from disk and emit an event for every key another process changed."""
        on_disk = self._read_file()
        events: List[StorageEvent] = []
        with self._lock:
            for key in set(self._items) | set(on_disk):
                old = self._items.get(key)
                new = on_disk.get(key)
                if old != new:
                    events.append(StorageEvent(key, old, new, None))
            self._items = on_disk
        for event in events:
            self._emit(event)
        return events

    def start_watching(self, interval_seconds: int = 2) -> None:
        if self._sched is not None:
            return
        self._sched = BackgroundScheduler()
        self._sched.start()
        self._sched.add_job(
            self.refresh,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id="storage_watcher",
            replace_existing=True,
        )
        logger.info("Watching %s every %s seconds", self.path, interval_seconds)

    def stop_watching(self, wait: bool = True) -> None:
        if not self._sched:
            return
        try:
            self._sched.shutdown(wait=wait)
        finally:
            self._sched = None
