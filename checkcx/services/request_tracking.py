"""Classify and count outbound HTTP requests made through a `requests.Session`.

Only "interesting" traffic is counted: API calls against the dashboard's own
origin and any cross-origin call. Framework bookkeeping (static assets,
cache-busting refetches, speculative prefetches) is ignored. False negatives
are acceptable; the classifier is a heuristic, not a protocol.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import parse_qs, urljoin, urlsplit

import requests
from requests.structures import CaseInsensitiveDict

from checkcx.services.inflight_counter import InflightCounter

logger = logging.getLogger(__name__)

PATCH_FLAG = "_checkcx_fetch_patched"


def _origin_of(url: str) -> Optional[tuple]:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    # `.port` raises ValueError on a malformed port
    port = parts.port
    return (parts.scheme.lower(), (parts.hostname or "").lower(), port)


def _header(headers: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    if not headers:
        return None
    for key, value in headers.items():
        if key.lower() == name:
            return None if value is None else str(value)
    return None


@dataclass(frozen=True)
class TrackingPolicy:
    """Decides whether a request counts toward the in-flight total.

    `origin` is the base URL of the dashboard the client talks to. A policy
    without an origin belongs to a non-interactive context and tracks nothing.
    """

    origin: Optional[str]
    api_prefix: str = "/api/"
    internal_path_prefix: str = "/static/"
    cache_bust_param: str = "_rsc"

    def should_track(self, url: Any, headers: Optional[Mapping[str, Any]] = None, params: Any = None) -> bool:
        if not self.origin:
            return False

        try:
            resolved = urljoin(self.origin, str(url))
            target = _origin_of(resolved)
            own = _origin_of(self.origin)
        except ValueError:
            return False
        if target is None or own is None:
            return False

        parts = urlsplit(resolved)
        if self.cache_bust_param in parse_qs(parts.query, keep_blank_values=True):
            return False
        if isinstance(params, Mapping) and self.cache_bust_param in params:
            return False

        path = parts.path or "/"
        if path.startswith(self.internal_path_prefix):
            return False

        purpose = _header(headers, "purpose")
        if purpose is None:
            purpose = _header(headers, "sec-purpose")
        if purpose == "prefetch":
            return False

        if target == own and not path.startswith(self.api_prefix):
            return False

        return True


def install_fetch_interceptor(session: requests.Session, counter: InflightCounter, policy: TrackingPolicy) -> bool:
    """Wrap `session.request` so tracked requests bracket `counter.start()`/`end()`.

    Arguments, return values and raised exceptions pass through unchanged.
    Returns False when the session was already instrumented.
    """
    if getattr(session, PATCH_FLAG, False):
        return False

    original_request = session.request

    def tracked_request(method, url, *args, **kwargs):
        # per-call headers override session headers regardless of case, as requests merges them
        headers = CaseInsensitiveDict(session.headers or {})
        headers.update(kwargs.get("headers") or {})
        track = policy.should_track(url, headers, kwargs.get("params"))
        if track:
            counter.start()
        try:
            return original_request(method, url, *args, **kwargs)
        finally:
            if track:
                counter.end()

    session.request = tracked_request
    setattr(session, PATCH_FLAG, True)
    logger.debug("Fetch interceptor installed for origin %s", policy.origin)
    return True
