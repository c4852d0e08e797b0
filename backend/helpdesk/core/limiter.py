"""Rate limiting configuration."""

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from helpdesk.core.config import settings

# In-process storage: limits are per worker.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    enabled=settings.RATE_LIMIT_ENABLED,
)
