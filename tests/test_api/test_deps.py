"""Tests for request-scoped dependencies."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from dairycart.api.deps import get_db


def fake_session() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


class TestGetDb:
    @pytest.mark.asyncio
    async def test_request_session_is_not_committed_on_teardown(self):
        session = fake_session()

        with patch("dairycart.infra.database.get_session_factory", return_value=lambda: session):
            dependency = get_db()
            assert await dependency.__anext__() is session
            with pytest.raises(StopAsyncIteration):
                await dependency.__anext__()

        session.commit.assert_not_awaited()
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_request_session_rolled_back_on_error(self):
        session = fake_session()

        with patch("dairycart.infra.database.get_session_factory", return_value=lambda: session):
            dependency = get_db()
            await dependency.__anext__()
            with pytest.raises(RuntimeError):
                await dependency.athrow(RuntimeError("handler failed"))

        session.rollback.assert_awaited_once()
        session.close.assert_awaited_once()
