"""Rate limiting configuration using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from reading_tracker.config import settings

# Keyed by client IP; importable anywhere without circular imports
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
