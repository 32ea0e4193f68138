"""Custom exceptions for check-cx admin services."""
from typing import Optional


class ValidationError(Exception):
    """Raised when a submitted field fails a field-level check."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class RecordNotFoundError(Exception):
    """Raised when a row addressed by id does not exist."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} '{record_id}' not found")


class DuplicateRecordError(Exception):
    """Raised when an insert/update violates a uniqueness constraint."""

    def __init__(self, table: str, field: str, value: str):
        self.table = table
        self.field = field
        self.value = value
        super().__init__(f"{table}.{field} '{value}' already exists")


class AdminApiError(Exception):
    """Raised by the admin client when a call fails at transport or HTTP level."""

    def __init__(self, method: str, url: str, status_code: Optional[int] = None, detail: Optional[str] = None, original: Optional[Exception] = None):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.detail = detail
        self.original = original
        if status_code is None:
            msg = f"{method} {url} failed: {original}"
        else:
            msg = f"{method} {url} returned {status_code}: {detail}"
        super().__init__(msg)
