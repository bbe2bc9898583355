"""
API route modules.
"""

from .digest import router as digest_router
from .feeds import router as feeds_router
from .misc import router as misc_router
from .summarization import router as summarization_router

__all__ = [
    "digest_router",
    "feeds_router",
    "misc_router",
    "summarization_router",
]
