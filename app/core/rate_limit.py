from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-client limit for a route; falls back to RATE_LIMIT when none is given."""
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def passthrough(func):
        return func

    return passthrough
