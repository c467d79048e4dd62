"""Rate limiting using slowapi, keyed by client IP."""

import json
from typing import Any

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from doc_classifier.config import get_settings

DEFAULT_LIMIT = "200/minute"


def get_client_ip(request: Request) -> str:
    """
    Get the client IP address from the request.

    X-Forwarded-For is only honoured when the direct peer is one of the
    configured TRUSTED_PROXIES, so clients cannot spoof their address.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address string
    """
    direct_ip: str = get_remote_address(request)

    trusted = get_settings().trusted_proxy_list
    if direct_ip in trusted:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

    return direct_ip


# In-memory storage; limits are per process
limiter = Limiter(key_func=get_client_ip, default_limits=[DEFAULT_LIMIT])


def classify_limit() -> str:
    return get_settings().classify_rate_limit


def upload_limit() -> str:
    return get_settings().upload_rate_limit


def batch_limit() -> str:
    return get_settings().batch_rate_limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Return 429 Too Many Requests with Retry-After and X-RateLimit-* headers.

    Args:
        request: FastAPI request object
        exc: RateLimitExceeded exception with limit details

    Returns:
        Response with 429 status code and rate limit headers
    """
    retry_after = getattr(exc, "retry_after", 60)

    error_body = {
        "detail": "Rate limit exceeded",
        "message": f"Too many requests. Please retry after {retry_after} seconds.",
        "retry_after": retry_after,
    }

    response = Response(
        content=json.dumps(error_body),
        status_code=429,
        media_type="application/json",
    )

    response.headers["Retry-After"] = str(retry_after)
    response.headers["X-RateLimit-Remaining"] = "0"

    if getattr(exc, "detail", None):
        response.headers["X-RateLimit-Limit"] = str(exc.detail)

    return response


def get_limiter() -> Any:
    """Return the module-level limiter used by route decorators."""
    return limiter
