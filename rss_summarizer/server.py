"""
RSS Summarizer API Server

FastAPI application providing endpoints for:
- Article and discussion-thread summarization
- The daily-events digest, split into summarized topic blocks
- Parsed feed items for the mobile list view
- Liveness and health checks
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import config, state
from .exceptions import ConfigurationError, ValidationError
from .feeds import FeedReader
from .fetcher import ContentFetcher
from .providers import get_provider_from_env
from .rate_limit import setup_rate_limiting
from .routes import digest_router, feeds_router, misc_router, summarization_router
from .summarizer import SummarizationClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared fetcher, feed reader and summarization client."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Skip if already initialized (e.g., by tests)
    if state.fetcher is None:
        state.fetcher = ContentFetcher(timeout=config.ARTICLE_FETCH_TIMEOUT)
        state.feed_reader = FeedReader(state.fetcher, timeout=config.FEED_FETCH_TIMEOUT)

        # The API key is read here, once, and handed to the provider
        state.provider = get_provider_from_env(
            openai_key=config.OPENAI_API_KEY or None,
            anthropic_key=config.ANTHROPIC_API_KEY or None,
            preferred_provider=config.LLM_PROVIDER or None,
            default_model=config.LLM_MODEL or None,
            timeout=config.LLM_TIMEOUT,
        )

        if state.provider:
            state.summarizer = SummarizationClient(provider=state.provider)
            logger.info(f"Completion provider initialized: {state.provider.name}")
        else:
            logger.warning(
                "No completion API key configured. Set OPENAI_API_KEY or "
                "ANTHROPIC_API_KEY. /api/summarize will fail every request."
            )

    logger.info(f"Backend server ready (port {config.PORT})")
    yield


app = FastAPI(
    title="RSS Summarizer API",
    version=__version__,
    lifespan=lifespan
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.error(f"  Error: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed summarize bodies are a 400 {error}; other routes keep the 422 default."""
    if request.url.path != "/api/summarize":
        return await request_validation_exception_handler(request, exc)

    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.error(f"  Invalid request body: {message}")
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {message}"})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"  Error: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": str(exc) or exc.__class__.__name__})


setup_rate_limiting(app)

# Include routers
app.include_router(misc_router)
app.include_router(summarization_router)
app.include_router(digest_router)
app.include_router(feeds_router)
