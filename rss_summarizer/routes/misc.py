"""
Miscellaneous routes: liveness message and health check.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from .. import __version__
from ..config import state

router = APIRouter(tags=["misc"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plaintext liveness message."""
    return "RSS Summarizer Backend is running!"


@router.get("/status")
async def health_check() -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "summarization_enabled": state.summarizer is not None,
    }
