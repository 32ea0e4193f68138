import os
import logging
import secrets
from typing import Optional

from fastapi import HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

logger = logging.getLogger(__name__)

# HTTP Bearer token auth for every admin route.
# SECURITY: No ADMIN_TOKEN must fail-closed (deny by default).
security = HTTPBearer()

SESSION_COOKIE = "checkcx_token"


def tokens_match(given: Optional[str], expected: str) -> bool:
    """Constant-time comparison that accepts any unicode input."""
    # compare_digest rejects non-ASCII str, so compare the UTF-8 bytes
    return secrets.compare_digest((given or "").encode("utf-8"), expected.encode("utf-8"))


def require_admin(creds: HTTPAuthorizationCredentials = Security(security)):
    token = creds.credentials if creds is not None else None
    admin = os.getenv("ADMIN_TOKEN")
    if not admin:
        logger.error("ADMIN_TOKEN not set - admin endpoints are disabled")
        raise HTTPException(status_code=503, detail="ADMIN_TOKEN not configured")
    if not tokens_match(token, admin):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return True


def is_admin_token(token) -> bool:
    """Non-raising check used by the HTML shell, which authenticates by cookie."""
    admin = os.getenv("ADMIN_TOKEN")
    if not admin or not token:
        return False
    return tokens_match(token, admin)
