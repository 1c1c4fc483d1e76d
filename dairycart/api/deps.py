"""FastAPI dependencies for dependency injection.

Provides:
- Database session scoped to the request
- SKU validator and creation pipeline built at startup
- Parsed list filter
- Per-request deadline
"""

import asyncio
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.config import settings
from dairycart.core.creation_pipeline import CreationPipeline
from dairycart.core.filters import QueryFilter, parse_raw_filter_params
from dairycart.core.validation import SkuValidator
from dairycart.infra.database import get_db_session
from dairycart.infra.logging import get_logger

logger = get_logger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    Services commit their own writes before the handler returns; the
    session is only rolled back and closed here.

    Yields:
        AsyncSession
    """
    async with get_db_session(commit=False) as session:
        yield session


def get_sku_validator(request: Request) -> SkuValidator:
    return request.app.state.sku_validator


def get_creation_pipeline(request: Request) -> CreationPipeline:
    return request.app.state.creation_pipeline


def get_query_filter(request: Request) -> QueryFilter:
    """Parse page, limit and time bounds from the query string.

    Never fails; unusable parameters fall back to their defaults.
    """
    return parse_raw_filter_params(request.query_params)


def deadline() -> asyncio.Timeout:
    """Deadline for the database work of one request.

    Example:
        async with deadline():
            product = await products_service.retrieve_product(db, sku)
    """
    return asyncio.timeout(settings.request_timeout_seconds)


# Type aliases for cleaner annotations
DbSession = Annotated[AsyncSession, Depends(get_db)]
SkuValidatorDep = Annotated[SkuValidator, Depends(get_sku_validator)]
PipelineDep = Annotated[CreationPipeline, Depends(get_creation_pipeline)]
QueryFilterDep = Annotated[QueryFilter, Depends(get_query_filter)]
