"""
Optional API key authentication for the /api routes.

When AUTH_API_KEY is not configured every request is allowed, which is the
normal mode for a backend paired with a single local client. When it is set,
callers must send it in the X-API-Key header.
"""

import secrets

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from .config import config

API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)


def verify_api_key(api_key: str | None = Security(API_KEY_HEADER)) -> str:
    """
    Verify the API key from request headers.

    Returns:
        The validated API key, or "" when authentication is disabled

    Raises:
        HTTPException: 401 if authentication is enabled and the key is missing or wrong
    """
    configured_key = config.AUTH_API_KEY
    if not configured_key:
        return ""

    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Provide X-API-Key header.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    # Constant-time comparison
    if not secrets.compare_digest(api_key, configured_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return api_key
