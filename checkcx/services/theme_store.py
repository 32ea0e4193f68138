"""Tri-state theme preference resolved against the OS color scheme.

Storage and color-scheme access never raise out of this module: theming must
not block rendering, so failures degrade to "system, no persistence".
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from checkcx.domain.theme import (
    THEME_STORAGE_KEY,
    ResolvedTheme,
    ThemePreference,
    normalize_theme_preference,
    resolve_theme,
)
from checkcx.services.color_scheme import ColorSchemeQuery
from checkcx.services.local_storage import LocalStorage, StorageEvent

logger = logging.getLogger(__name__)


@dataclass
class DocumentRoot:
    """Presentation target: the `<html>` element's theme-related attributes."""

    classes: Set[str] = field(default_factory=set)
    color_scheme: Optional[str] = None
    dataset: Dict[str, str] = field(default_factory=dict)

    @property
    def is_dark(self) -> bool:
        return "dark" in self.classes


def apply_resolved_theme(root: DocumentRoot, resolved: ResolvedTheme, preference: ThemePreference) -> None:
    is_dark = resolved is ResolvedTheme.DARK
    if is_dark:
        root.classes.add("dark")
    else:
        root.classes.discard("dark")
    root.color_scheme = "dark" if is_dark else "light"
    root.dataset["theme"] = preference.value


class ThemeStore:
    """One browsing context's view of the persisted theme preference.

    Several stores may share one `LocalStorage`; a write through one of them
    reaches the others as a storage event and they re-resolve and re-apply
    without a reload.

    The store's lock guards only its own fields; storage writes and
    subscriber callbacks always run with it released.
    """

    def __init__(
        self,
        storage: LocalStorage,
        color_scheme: ColorSchemeQuery,
        root: Optional[DocumentRoot] = None,
        *,
        key: str = THEME_STORAGE_KEY,
    ):
        self.storage = storage
        self.color_scheme = color_scheme
        self.root = root if root is not None else DocumentRoot()
        self.key = key
        self._lock = threading.RLock()
        self._preference = ThemePreference.SYSTEM
        self._resolved = ResolvedTheme.LIGHT
        self._subscribers: List[Callable[[], None]] = []
        self._remove_storage_listener: Optional[Callable[[], None]] = None
        self._media_listening = False
        self._started = False

    def start(self) -> "ThemeStore":
        """Read the persisted preference, apply it, and begin listening."""
        with self._lock:
            if self._started:
                return self
            self._started = True
            self._preference = self._read_stored()
            try:
                self._remove_storage_listener = self.storage.add_listener(self._on_storage)
            except Exception:
                logger.debug("Could not subscribe to theme storage events", exc_info=True)
        self._refresh()
        return self

    def close(self) -> None:
        with self._lock:
            if self._remove_storage_listener is not None:
                self._remove_storage_listener()
                self._remove_storage_listener = None
            self._sync_media_listener(listen=False)
            self._started = False

    def get_preference(self) -> ThemePreference:
        return self._preference

    def get_resolved_theme(self) -> ResolvedTheme:
        return resolve_theme(self._preference, self._prefers_dark())

    def set_preference(self, preference: Any) -> ThemePreference:
        pref = normalize_theme_preference(preference)
        with self._lock:
            self._preference = pref
        # the write fans out to other stores sharing the storage; our lock must be free
        try:
            self.storage.set_item(self.key, pref.value, source=self)
        except Exception:
            logger.debug("Could not persist theme preference", exc_info=True)
        self._refresh()
        return pref

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run after every re-resolve; returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                try:
                    self._subscribers.remove(callback)
                except ValueError:
                    pass

        return unsubscribe

    def _read_stored(self) -> ThemePreference:
        try:
            return normalize_theme_preference(self.storage.get_item(self.key))
        except Exception:
            logger.debug("Could not read theme preference", exc_info=True)
            return ThemePreference.SYSTEM

    def _prefers_dark(self) -> bool:
        try:
            return bool(self.color_scheme.matches)
        except Exception:
            logger.debug("Could not read OS color scheme", exc_info=True)
            return False

    def _refresh(self) -> None:
        with self._lock:
            self._resolved = self.get_resolved_theme()
            apply_resolved_theme(self.root, self._resolved, self._preference)
            self._sync_media_listener(listen=self._started and self._preference is ThemePreference.SYSTEM)
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback()
            except Exception:
                logger.exception("Theme subscriber %r failed", callback)

    def _sync_media_listener(self, listen: bool) -> None:
        if listen == self._media_listening:
            return
        try:
            if listen:
                self.color_scheme.add_listener(self._on_media_change)
            else:
                self.color_scheme.remove_listener(self._on_media_change)
            self._media_listening = listen
        except Exception:
            logger.debug("Could not toggle OS color scheme subscription", exc_info=True)

    def _on_media_change(self) -> None:
        if self._preference is not ThemePreference.SYSTEM:
            return
        self._refresh()

    def _on_storage(self, event: StorageEvent) -> None:
        if event.key != self.key or event.source is self:
            return
        with self._lock:
            self._preference = normalize_theme_preference(event.new_value)
        self._refresh()
