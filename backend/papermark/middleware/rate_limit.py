"""Rate limiting middleware using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from papermark.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

folders_limiter = limiter.limit(settings.folders_rate_limit)
