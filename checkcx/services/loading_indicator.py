"""Debounced presentation of the in-flight request signal.

Turns a possibly rapidly toggling `is_loading()` signal into a visually stable
indicator: requests shorter than the show delay never show it, and once shown
it stays up for at least the minimum visible duration.
"""
from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from checkcx.services.inflight_counter import InflightCounter

logger = logging.getLogger(__name__)

SHOW_DELAY_MS = 150
MIN_VISIBLE_MS = 250


class IndicatorState(str, Enum):
    HIDDEN = "hidden"
    PENDING_SHOW = "pending_show"
    VISIBLE = "visible"


class LoadingIndicator:
    """Timer-driven state machine subscribed to an `InflightCounter`.

    - `on_change(visible)` is called on every Hidden<->Visible transition.
    - `timer_factory(seconds, fn)` must return an object with `start()` and
      `cancel()` (the `threading.Timer` interface).
    - `clock()` returns monotonic seconds.

    Timer callbacks run on their own threads, so transitions happen under a
    lock and `on_change` is invoked after it is released.
    """

    def __init__(
        self,
        counter: InflightCounter,
        on_change: Optional[Callable[[bool], None]] = None,
        *,
        show_delay_ms: int = SHOW_DELAY_MS,
        min_visible_ms: int = MIN_VISIBLE_MS,
        timer_factory=threading.Timer,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._counter = counter
        self._on_change = on_change
        self._show_delay = max(0, show_delay_ms) / 1000.0
        self._min_visible = max(0, min_visible_ms) / 1000.0
        self._timer_factory = timer_factory
        self._clock = clock

        self._lock = threading.RLock()
        self._state = IndicatorState.HIDDEN
        self._shown_at: Optional[float] = None
        self._show_timer = None
        self._hide_timer = None
        self._signal = False
        self._closed = False

        self._unsubscribe = counter.subscribe(self._on_signal)
        if counter.is_loading():
            self._on_signal()

    @property
    def state(self) -> IndicatorState:
        return self._state

    @property
    def visible(self) -> bool:
        return self._state is IndicatorState.VISIBLE

    @property
    def shown_at(self) -> Optional[float]:
        return self._shown_at

    def _on_signal(self) -> None:
        with self._lock:
            # read under the lock: a notification may arrive after a later edge was handled
            loading = self._counter.is_loading()
            if self._closed or loading == self._signal:
                return
            self._signal = loading
            if loading:
                self._cancel_hide()
                if self._state is IndicatorState.HIDDEN:
                    self._state = IndicatorState.PENDING_SHOW
                    self._show_timer = self._arm(self._show_delay, self._fire_show)
                return

            if self._state is IndicatorState.PENDING_SHOW:
                self._cancel_show()
                self._state = IndicatorState.HIDDEN
            elif self._state is IndicatorState.VISIBLE:
                shown_at = self._shown_at if self._shown_at is not None else self._clock()
                remaining = max(0.0, self._min_visible - (self._clock() - shown_at))
                self._cancel_hide()
                self._hide_timer = self._arm(remaining, self._fire_hide)

    def _arm(self, seconds: float, callback: Callable[[object], None]):
        holder = []
        timer = self._timer_factory(seconds, lambda: callback(holder[0]))
        holder.append(timer)
        timer.start()
        return timer

    def _fire_show(self, timer) -> None:
        with self._lock:
            if self._closed or timer is not self._show_timer:
                return
            self._show_timer = None
            self._state = IndicatorState.VISIBLE
            self._shown_at = self._clock()
        self._notify(True)

    def _fire_hide(self, timer) -> None:
        with self._lock:
            if self._closed or timer is not self._hide_timer:
                return
            self._hide_timer = None
            self._state = IndicatorState.HIDDEN
            self._shown_at = None
        self._notify(False)

    def _cancel_show(self) -> None:
        if self._show_timer is not None:
            self._show_timer.cancel()
            self._show_timer = None

    def _cancel_hide(self) -> None:
        if self._hide_timer is not None:
            self._hide_timer.cancel()
            self._hide_timer = None

    def _notify(self, visible: bool) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(visible)
        except Exception:
            logger.exception("LoadingIndicator on_change callback failed")

    def close(self) -> None:
        """Clear pending timers and stop observing the counter."""
        with self._lock:
            self._closed = True
            self._cancel_show()
            self._cancel_hide()
        self._unsubscribe()
