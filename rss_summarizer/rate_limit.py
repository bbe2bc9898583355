"""
Per-IP rate limiting.

Every summarize request can trigger two completion calls, so requests are
limited per client address with slowapi to keep completion-service spend
bounded.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .config import config


def get_rate_limit() -> str:
    """Default limit string from config. Zero or less disables limiting."""
    limit = config.RATE_LIMIT_PER_MINUTE
    if limit <= 0:
        return "1000000/minute"
    return f"{limit}/minute"


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_rate_limit()],
    storage_uri="memory://",
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 in the same {error} shape as the other API errors."""
    return JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded: {exc.detail}"},
        headers={"Retry-After": "60"},
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter, its middleware and its error handler to the app."""
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
