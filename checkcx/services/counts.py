import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def safe_count(label: str, fn: Callable[[], int]) -> Optional[int]:
    """Run one count query; a failure is logged and reported as `None`."""
    try:
        return int(fn())
    except Exception:
        logger.exception("Count %s failed", label)
        return None
