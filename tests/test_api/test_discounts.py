"""Tests for discount endpoints."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from dairycart.core.errors import InvalidInputError, NotFoundError
from dairycart.core.records import Discount

SERVICE = "dairycart.services.discounts"

STARTS_ON = datetime(2017, 1, 1, tzinfo=timezone.utc)


def example_discount(**overrides) -> Discount:
    fields = dict(
        id=1,
        name="10 percent off",
        discount_type="percentage",
        amount=10.0,
        starts_on=STARTS_ON,
    )
    fields.update(overrides)
    return Discount(**fields)


class TestDiscountRetrieval:
    @pytest.mark.asyncio
    async def test_get_uses_type_key(self, client: AsyncClient):
        with patch(f"{SERVICE}.retrieve_discount", AsyncMock(return_value=example_discount())):
            response = await client.get("/v1/discount/1")

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "percentage"
        assert "discount_type" not in data
        assert data["amount"] == 10.0

    @pytest.mark.asyncio
    async def test_missing_discount(self, client: AsyncClient):
        missing = AsyncMock(side_effect=NotFoundError("discount", 99))
        with patch(f"{SERVICE}.retrieve_discount", missing):
            response = await client.get("/v1/discount/99")

        assert response.status_code == 404
        assert "`99`" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_list(self, client: AsyncClient):
        discounts = [example_discount(), example_discount(id=2, discount_type="flat_amount")]
        with patch(f"{SERVICE}.list_discounts", AsyncMock(return_value=(2, discounts))):
            response = await client.get("/v1/discounts")

        assert response.status_code == 200
        assert [d["type"] for d in response.json()["data"]] == ["percentage", "flat_amount"]


class TestDiscountCreation:
    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient):
        create = AsyncMock(return_value=example_discount())
        with patch(f"{SERVICE}.create_discount", create):
            response = await client.post(
                "/v1/discount",
                json={
                    "name": "10 percent off",
                    "type": "percentage",
                    "amount": 10,
                    "starts_on": "2017-01-01T00:00:00Z",
                },
            )

        assert response.status_code == 201
        assert response.json()["id"] == 1
        sent = create.await_args.args[1]
        assert sent.discount_type == "percentage"
        assert sent.starts_on == STARTS_ON

    @pytest.mark.asyncio
    async def test_invalid_type(self, client: AsyncClient):
        create = AsyncMock()
        with patch(f"{SERVICE}.create_discount", create):
            response = await client.post(
                "/v1/discount",
                json={
                    "name": "free stuff",
                    "type": "everything_free",
                    "amount": 10,
                    "starts_on": "2017-01-01T00:00:00Z",
                },
            )

        assert response.status_code == 400
        assert response.json()["error_type"] == "invalid_input"
        create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expiry_before_start(self, client: AsyncClient):
        response = await client.post(
            "/v1/discount",
            json={
                "name": "backwards",
                "type": "flat_amount",
                "amount": 5,
                "starts_on": "2017-02-01T00:00:00Z",
                "expires_on": "2017-01-01T00:00:00Z",
            },
        )
        assert response.status_code == 400


class TestDiscountUpdate:
    @pytest.mark.asyncio
    async def test_update(self, client: AsyncClient):
        update = AsyncMock(return_value=example_discount(amount=15.0))
        with patch(f"{SERVICE}.update_discount", update):
            response = await client.put("/v1/discount/1", json={"amount": 15})

        assert response.status_code == 200
        assert response.json()["amount"] == 15.0

    @pytest.mark.asyncio
    async def test_rejected_update(self, client: AsyncClient):
        rejected = AsyncMock(side_effect=InvalidInputError("Invalid input provided for discount body"))
        with patch(f"{SERVICE}.update_discount", rejected):
            response = await client.put("/v1/discount/1", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient):
        with patch(f"{SERVICE}.archive_discount", AsyncMock()):
            response = await client.delete("/v1/discount/1")

        assert response.status_code == 200
        assert response.json() == {"success": True, "id": 1}
