"""
Summarization route: article and discussion-thread summaries for one item.
"""

import asyncio
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..auth import verify_api_key
from ..schemas import ErrorResponse, SummarizeRequest, SummarizeResponse
from ..services import SummarizeServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["summarization"], dependencies=[Depends(verify_api_key)])

# Seconds between client-disconnect checks while sources are in flight
DISCONNECT_POLL_INTERVAL = 0.5


async def cancel_on_disconnect(request: Request, coro):
    """
    Await coro, cancelling it if the HTTP client goes away first.

    Cancellation propagates into the in-flight fetches and completion calls.
    """
    task = asyncio.ensure_future(coro)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("  Client disconnected; cancelling summarization")
                task.cancel()
                return await task
    finally:
        if not task.done():
            task.cancel()


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": SummarizeResponse}},
)
async def summarize(
    body: SummarizeRequest,
    request: Request,
    service: SummarizeServiceDep,
) -> JSONResponse:
    """
    Summarize an article (literal text or URL) and/or its discussion thread.

    Sources are independent: one summary is a success. 500 only when no
    source produced a summary.
    """
    logger.info(f"[{datetime.now().isoformat()}] Received POST request for /api/summarize")
    logger.info(f"  Received url: {body.url}")
    logger.info(f"  Received itemUrl: {body.item_url}")

    outcome = await cancel_on_disconnect(
        request,
        service.summarize(text=body.text, url=body.url, item_url=body.item_url),
    )
    response = SummarizeResponse.from_outcome(outcome)

    status_code = 200 if outcome.succeeded else 500
    if status_code != 200:
        logger.error(f"  No summaries generated: {response.details}")
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(by_alias=True, exclude_none=True),
    )
