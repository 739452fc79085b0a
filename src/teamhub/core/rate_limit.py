"""Rate limiting for credential endpoints (slowapi).

Uses Redis for distributed counters when REDIS_URL is configured and
in-memory counters otherwise. Disabled in the testing environment.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.teamhub.core.config import get_settings
from src.teamhub.core.logging import get_logger

logger = get_logger(__name__)

LOGIN_RATE_LIMIT = "10/minute"
REGISTER_RATE_LIMIT = "5/minute"
PASSWORD_RESET_RATE_LIMIT = "3/minute"


def get_rate_limit_key(request: Request) -> str:
    """Key buckets by client IP only; never by user-controlled headers."""
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; reconfiguring requires a restart
limiter = create_limiter()
