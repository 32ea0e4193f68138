from typing import Any


def normalize_error_message(error: Any, fallback: str = "operation failed") -> str:
    """Map backend error text to a message fit for the admin UI.

    Known categories (auth, permission, uniqueness, expired token) get a fixed
    wording; anything else collapses to `fallback` so internals never leak.
    """
    if isinstance(error, str):
        message = error
    elif isinstance(error, Exception):
        message = str(error)
    else:
        message = ""

    lower = message.strip().lower()
    if not lower:
        return fallback
    if "unauthorized" in lower or "not authorized" in lower:
        return "not signed in or not authorized"
    if "permission" in lower:
        return "insufficient permissions"
    if "duplicate" in lower or "unique" in lower or "already exists" in lower:
        return "record already exists"
    if "jwt" in lower and "expired" in lower:
        return "session expired, sign in again"
    return fallback
