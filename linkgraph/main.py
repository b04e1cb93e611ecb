"""
LinkGraph API.

FastAPI application serving bounded-depth Wikipedia link graphs.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from linkgraph.api.errors import error_response
from linkgraph.api.v1 import graph
from linkgraph.clients import ClientManager
from linkgraph.config import settings
from linkgraph.models.common import HealthResponse
from linkgraph.rate_limit import limiter

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Wikipedia API: {settings.wikipedia_api_url}")
    logger.info(f"CORS origins: {settings.cors_origins}")
    yield
    await ClientManager().close()
    logger.info("Shutting down LinkGraph API")


# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description=settings.api_description,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Register rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)

# Include routers
app.include_router(graph.router)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["X-XSS-Protection"] = "0"
    # Strict CSP for API routes; skip for docs pages that need inline scripts
    if request.url.path not in ("/docs", "/redoc", "/openapi.json"):
        response.headers["Content-Security-Policy"] = "default-src 'none'"
    return response


@app.get("/health", response_model=HealthResponse)
async def health_check(response: Response):
    """
    Health check endpoint.

    Reports the upstream link source and whether the shared client is open.
    """
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"

    return HealthResponse(
        status="healthy",
        version=settings.api_version,
        upstream=settings.wikipedia_api_url,
        link_client="open" if ClientManager().is_open else "idle",
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    """Report the first invalid parameter as a 400."""
    logger.warning(f"Validation error: {exc}")

    errors = exc.errors()
    first_error = errors[0] if errors else {}
    loc = first_error.get("loc") or ()

    return error_response(
        400,
        "INVALID_PARAMETER",
        first_error.get("msg", "Invalid parameters"),
        details={"parameter": loc[-1]} if loc else None,
    )


@app.exception_handler(Exception)
async def global_exception_handler(_request, exc):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")
