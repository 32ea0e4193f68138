"""Field-level checks shared by the admin services."""
from typing import Any, Optional
from urllib.parse import urlsplit

from checkcx.exceptions import ValidationError


def as_none_if_empty(value: Optional[Any]) -> Optional[str]:
    trimmed = str(value if value is not None else "").strip()
    return trimmed or None


def require_text(value: Optional[Any], field: str, max_length: Optional[int] = None) -> str:
    text = as_none_if_empty(value)
    if text is None:
        raise ValidationError(field, "must not be empty")
    if max_length is not None and len(text) > max_length:
        raise ValidationError(field, f"is too long (max {max_length} characters)")
    return text


def require_http_url(value: Optional[Any], field: str, require_path: bool = False) -> str:
    url = require_text(value, field)
    try:
        parts = urlsplit(url)
    except ValueError:
        raise ValidationError(field, "is not a valid URL")
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValidationError(field, "must be an http:// or https:// URL")
    if require_path and parts.path in ("", "/"):
        raise ValidationError(field, "must include the full path, not just the host")
    return url
