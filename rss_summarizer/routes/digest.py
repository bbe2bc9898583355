"""
Digest route: the daily-events feed split into summarized topic blocks.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..auth import verify_api_key
from ..exceptions import FetchError
from ..schemas import FeedErrorResponse, ProcessedWikipediaEvent
from ..services import DigestServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["digest"], dependencies=[Depends(verify_api_key)])


@router.get(
    "/wikipedia-daily-events",
    response_model=list[ProcessedWikipediaEvent],
    responses={500: {"model": FeedErrorResponse}},
)
async def wikipedia_daily_events(service: DigestServiceDep):
    """Fetch the digest feed and return one summarized event per block."""
    try:
        events = await service.daily_events()
    except FetchError as e:
        logger.error(f"Failed to fetch digest feed: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to fetch or process Wikipedia events", "error": str(e)},
        )
    return [ProcessedWikipediaEvent.from_event(event) for event in events]
