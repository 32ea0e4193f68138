from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class NotificationLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """System notification banner shown by the public status page."""

    id: str
    message: str
    level: NotificationLevel
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
