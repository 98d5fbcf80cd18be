from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Apply the configured per-client limit (``RATE_LIMIT``) unless rate limiting is off."""
    if not settings.rate_limit_enabled:
        return lambda func: func
    return limiter.limit(limit or settings.rate_limit)
