from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class CheckConfig:
    """Provider credentials/endpoint consumed by the external checking service.

    The API key is deliberately absent: it is write-only from the admin's
    point of view and is read back only when copying a config.
    """

    id: str
    name: Optional[str]
    type: Optional[str]
    model: Optional[str]
    endpoint: Optional[str]
    enabled: Optional[bool] = None
    is_maintenance: Optional[bool] = None
    request_header: Optional[dict[str, str]] = None
    metadata: Optional[dict[str, Any]] = None
    group_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CheckConfigDraft:
    """Validated field set for inserting or updating a check config."""

    name: str
    type: str
    model: str
    endpoint: str
    enabled: bool = True
    is_maintenance: bool = False
    request_header: Optional[dict[str, str]] = None
    metadata: Optional[dict[str, Any]] = None
    group_name: Optional[str] = None
    api_key: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class ConfigPage:
    """One page of a filtered config listing."""

    rows: list[CheckConfig]
    total: int
    page: int
    per_page: int
