"""FastAPI application entry point.

Dairycart commerce backend: products, variants, discounts and users over
PostgreSQL.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dairycart import __version__
from dairycart.api.routes.attributes import router as attributes_router
from dairycart.api.routes.discounts import router as discounts_router
from dairycart.api.routes.health import router as health_router
from dairycart.api.routes.products import router as products_router
from dairycart.api.routes.progenitors import router as progenitors_router
from dairycart.api.routes.users import router as users_router
from dairycart.config import settings
from dairycart.core.creation_pipeline import CreationPipeline
from dairycart.core.errors import DairycartError, DatabaseError, InternalError, MappingError
from dairycart.core.validation import SkuValidator
from dairycart.infra.database import close_db_engine, get_session_factory, verify_db_connection
from dairycart.infra.logging import (
    REQUEST_ID_HEADER,
    bind_request_context,
    get_logger,
    setup_logging,
)
from dairycart.schemas.common import ErrorResponse

# Setup logging first
setup_logging()
logger = get_logger(__name__)

API_PREFIX = "/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Build the SKU validator and creation pipeline
    - Verify database connection

    Shutdown:
    - Close database connections
    """
    logger.info("Dairycart starting", environment=settings.environment)

    app.state.sku_validator = SkuValidator(settings.sku_pattern)
    app.state.creation_pipeline = CreationPipeline(get_session_factory())

    db_ok = await verify_db_connection()
    if not db_ok:
        logger.warning("Database connection failed - will retry on first request")

    yield

    logger.info("Dairycart shutting down")
    await close_db_engine()
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title="Dairycart",
    description="Commerce backend for products, variants, discounts and users",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "dev" else None,
    redoc_url=None,
)

# CORS middleware (mainly for local development)
if settings.environment == "dev":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Bind a request id to the log context and log status and duration."""
    start = time.perf_counter()
    request_id = bind_request_context(
        request.headers.get(REQUEST_ID_HEADER),
        method=request.method,
        path=request.url.path,
    )
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "Request handled",
        status=response.status_code,
        duration_ms=int((time.perf_counter() - start) * 1000),
    )
    return response


# =============================================================================
# Exception Handlers
# =============================================================================


def _error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    body = ErrorResponse(error=message, error_type=error_type)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(DairycartError)
async def dairycart_exception_handler(request: Request, exc: DairycartError) -> JSONResponse:
    """Answer not found, invalid input and internal errors."""
    if isinstance(exc, InternalError):
        logger.error(
            "Internal error",
            action=exc.action,
            error=str(exc.cause) if exc.cause else None,
            path=request.url.path,
        )
    else:
        logger.info(
            "Request rejected",
            error=exc.message,
            error_type=exc.error_type,
            path=request.url.path,
        )
    return _error_response(exc.status_code, exc.message, exc.error_type)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Undecodable or invalid request data is a 400, not FastAPI's 422."""
    details = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    ]
    message = "Invalid input provided"
    if details:
        message = f"{message} ({'; '.join(details)})"
    logger.info("Request validation failed", errors=details, path=request.url.path)
    return _error_response(400, message, "invalid_input")


@app.exception_handler(DatabaseError)
@app.exception_handler(MappingError)
@app.exception_handler(TimeoutError)
async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Data-access failures and expired deadlines. The cause is logged only."""
    logger.error(
        "Request failed",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return _error_response(500, InternalError.public_message, "internal_error")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )
    return _error_response(500, InternalError.public_message, "internal_error")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(products_router, prefix=API_PREFIX, tags=["Products"])
app.include_router(progenitors_router, prefix=API_PREFIX, tags=["Progenitors"])
app.include_router(attributes_router, prefix=API_PREFIX, tags=["Attributes"])
app.include_router(discounts_router, prefix=API_PREFIX, tags=["Discounts"])
app.include_router(users_router, prefix=API_PREFIX, tags=["Users"])


# =============================================================================
# Root Endpoint
# =============================================================================


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": "Dairycart",
        "version": __version__,
        "environment": settings.environment,
    }
