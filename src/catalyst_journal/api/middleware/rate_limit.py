"""Rate limiting for the unauthenticated auth endpoints.

Uses slowapi, keyed by client IP address.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ...config import get_settings


def get_rate_limit_key(request: Request) -> str:
    """Rate limit key for a request: the client's IP address."""
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=get_rate_limit_key, enabled=get_settings().rate_limit_enabled)


RATE_LIMIT_REGISTER = "3/minute"
RATE_LIMIT_LOGIN = "5/minute"
