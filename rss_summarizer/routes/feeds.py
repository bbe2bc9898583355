"""
Feed routes: parsed feed items for the list view.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from ..auth import verify_api_key
from ..config import config
from ..exceptions import FetchError
from ..schemas import FeedErrorResponse, FeedItemResponse
from ..services import FeedReaderDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feeds", tags=["feeds"], dependencies=[Depends(verify_api_key)])


@router.get(
    "/{source}",
    response_model=list[FeedItemResponse],
    response_model_exclude_none=True,
    responses={502: {"model": FeedErrorResponse}},
)
async def list_feed_items(source: str, feed_reader: FeedReaderDep):
    """List the items of a named feed (hn, wikipedia)."""
    url = config.feed_sources().get(source.lower())
    if not url:
        raise HTTPException(status_code=404, detail=f"Unknown feed source: {source}")

    try:
        feed = await feed_reader.fetch(url)
    except FetchError as e:
        logger.error(f"Failed to fetch feed {source}: {e}")
        return JSONResponse(
            status_code=502,
            content={"message": f"Failed to fetch {source} feed", "error": str(e)},
        )
    return [FeedItemResponse.from_item(item) for item in feed.items]
