"""Shared fixtures.

API tests run the real application over httpx's ASGI transport. The
lifespan is not started, so no database connection is made; the request
session is replaced by a mock and services are patched per test.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dairycart.api.deps import get_db
from dairycart.config import settings
from dairycart.core.creation_pipeline import CreationPipeline
from dairycart.core.validation import SkuValidator
from dairycart.main import app


@pytest.fixture
def mock_db_session() -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def mock_pipeline() -> MagicMock:
    pipeline = MagicMock(spec=CreationPipeline)
    pipeline.create_product = AsyncMock()
    pipeline.create_attributes = AsyncMock()
    return pipeline


@pytest_asyncio.fixture
async def client(
    mock_db_session: MagicMock,
    mock_pipeline: MagicMock,
) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.sku_validator = SkuValidator(settings.sku_pattern)
    app.state.creation_pipeline = mock_pipeline

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
