"""Rate limiting configuration for the token API."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from wowza_token.config import get_settings


def get_client_address(request) -> str:
    """
    Get the requesting client's address.

    Uses X-Forwarded-For header when proxy headers are trusted, otherwise
    uses remote address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded and get_settings().trust_proxy_headers:
        # Get first IP in chain (original client)
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


settings = get_settings()

limiter = Limiter(
    key_func=get_client_address,
    storage_uri=settings.rate_limit_storage,
)

# Usage: @limiter.limit(RATE_LIMIT_SIGN) on route functions
RATE_LIMIT_SIGN = settings.rate_limit_sign
RATE_LIMIT_VERIFY = settings.rate_limit_verify
