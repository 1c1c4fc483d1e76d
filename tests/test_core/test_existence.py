"""Tests for the existence gate."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import NoResultFound, OperationalError

from dairycart.core.errors import DatabaseError
from dairycart.core.existence import ExistenceGate


def session_returning(value) -> MagicMock:
    result = MagicMock()
    result.scalar_one.return_value = value
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    return session


class TestExistenceGate:
    @pytest.mark.asyncio
    async def test_existing_row(self):
        session = session_returning(True)

        assert await ExistenceGate(session).exists("products", "sku", "skateboard") is True

        statement, params = session.execute.call_args.args
        assert str(statement) == (
            "SELECT EXISTS(SELECT 1 FROM products WHERE sku = :p1 AND archived_on IS NULL)"
        )
        assert params == {"p1": "skateboard"}

    @pytest.mark.asyncio
    async def test_missing_or_archived_row(self):
        session = session_returning(False)
        assert await ExistenceGate(session).exists("products", "sku", "nonexistent") is False

    @pytest.mark.asyncio
    async def test_no_rows_is_false(self):
        result = MagicMock()
        result.scalar_one.side_effect = NoResultFound("No row was found")
        session = MagicMock()
        session.execute = AsyncMock(return_value=result)

        assert await ExistenceGate(session).exists("users", "email", "a@b.co") is False

    @pytest.mark.asyncio
    async def test_driver_failure_raises(self):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(DatabaseError):
            await ExistenceGate(session).exists("products", "sku", "skateboard")

    @pytest.mark.asyncio
    async def test_multi_column(self):
        session = session_returning(True)

        exists = await ExistenceGate(session).exists_where(
            "product_attribute_values", {"product_attribute_id": 3, "value": "red"}
        )

        assert exists is True
        _, params = session.execute.call_args.args
        assert params == {"p1": 3, "p2": "red"}

    @pytest.mark.asyncio
    async def test_unregistered_table_never_queried(self):
        session = session_returning(True)

        with pytest.raises(ValueError):
            await ExistenceGate(session).exists("pg_user", "usename", "postgres")
        session.execute.assert_not_called()
