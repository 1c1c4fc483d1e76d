"""Tests for attribute, attribute value and progenitor endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient

from dairycart.core.errors import InternalError, InvalidInputError, NotFoundError
from dairycart.core.records import ProductAttribute, ProductAttributeValue, Progenitor

SERVICE = "dairycart.services.attributes"


def attribute_with_values(name: str, values: list[str], attribute_id: int = 1) -> ProductAttribute:
    return ProductAttribute(
        id=attribute_id,
        name=name,
        progenitor_id=2,
        values=[
            ProductAttributeValue(id=attribute_id * 10 + i, attribute_id=attribute_id, value=v)
            for i, v in enumerate(values)
        ],
    )


class TestAttributeList:
    @pytest.mark.asyncio
    async def test_list(self, client: AsyncClient):
        attributes = [attribute_with_values("color", ["red", "blue"])]
        list_attributes = AsyncMock(return_value=(1, attributes))

        with patch(f"{SERVICE}.list_attributes", list_attributes):
            response = await client.get("/v1/product_attributes/2", params={"limit": "10"})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["limit"] == 10
        assert data["data"][0]["product_progenitor_id"] == 2
        assert [v["value"] for v in data["data"][0]["values"]] == ["red", "blue"]
        assert list_attributes.await_args.args[1] == 2


class TestAttributeCreation:
    @pytest.mark.asyncio
    async def test_values_round_trip(self, client: AsyncClient, mock_pipeline: MagicMock):
        created = attribute_with_values("something", ["one", "two", "three"], attribute_id=5)
        create_attributes = AsyncMock(return_value=[created])

        with patch(f"{SERVICE}.create_attributes", create_attributes):
            response = await client.post(
                "/v1/product_attributes/2",
                json={"name": "something", "values": ["one", "two", "three"]},
            )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "something"
        assert [v["value"] for v in data["values"]] == ["one", "two", "three"]
        assert all(v["product_attribute_id"] == 5 for v in data["values"])

        _, pipeline, progenitor_id, groups = create_attributes.await_args.args
        assert pipeline is mock_pipeline
        assert progenitor_id == 2
        assert groups[0].values == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_duplicate_values_in_body(self, client: AsyncClient):
        response = await client.post(
            "/v1/product_attributes/2",
            json={"name": "something", "values": ["one", "one"]},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_progenitor(self, client: AsyncClient):
        missing = AsyncMock(side_effect=NotFoundError("product progenitor", 99))
        with patch(f"{SERVICE}.create_attributes", missing):
            response = await client.post("/v1/product_attributes/99", json={"name": "color"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_transaction_failure(self, client: AsyncClient):
        failing = AsyncMock(side_effect=InternalError("commit transaction"))
        with patch(f"{SERVICE}.create_attributes", failing):
            response = await client.post("/v1/product_attributes/2", json={"name": "color"})

        assert response.status_code == 500
        assert response.json()["error"] == "Unexpected internal error"


class TestAttributeValues:
    @pytest.mark.asyncio
    async def test_create_value(self, client: AsyncClient):
        value = ProductAttributeValue(id=12, attribute_id=3, value="purple")
        with patch(f"{SERVICE}.create_attribute_value", AsyncMock(return_value=value)):
            response = await client.post("/v1/product_attributes/3/value", json={"value": "purple"})

        assert response.status_code == 201
        assert response.json()["id"] == 12
        assert response.json()["product_attribute_id"] == 3

    @pytest.mark.asyncio
    async def test_create_duplicate_value(self, client: AsyncClient):
        duplicate = AsyncMock(side_effect=InvalidInputError("product attribute value already exists"))
        with patch(f"{SERVICE}.create_attribute_value", duplicate):
            response = await client.post("/v1/product_attributes/3/value", json={"value": "red"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_value(self, client: AsyncClient):
        value = ProductAttributeValue(id=12, attribute_id=3, value="crimson")
        update = AsyncMock(return_value=value)
        with patch(f"{SERVICE}.update_attribute_value", update):
            response = await client.put("/v1/product_attribute_values/12", json={"value": "crimson"})

        assert response.status_code == 200
        assert response.json()["value"] == "crimson"
        assert update.await_args.args[1] == 12

    @pytest.mark.asyncio
    async def test_empty_update(self, client: AsyncClient):
        response = await client.put("/v1/product_attribute_values/12", json={})

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Invalid input provided for product attribute value body"
        )

    @pytest.mark.asyncio
    async def test_delete_value(self, client: AsyncClient):
        with patch(f"{SERVICE}.archive_attribute_value", AsyncMock()):
            response = await client.delete("/v1/product_attribute_values/12")

        assert response.status_code == 200
        assert response.json() == {"success": True, "id": 12}

    @pytest.mark.asyncio
    async def test_non_numeric_id(self, client: AsyncClient):
        response = await client.delete("/v1/product_attribute_values/twelve")
        assert response.status_code == 400


class TestProgenitors:
    @pytest.mark.asyncio
    async def test_get_progenitor(self, client: AsyncClient):
        progenitor = Progenitor(id=2, name="Skateboard", taxable=True, price=12.34)
        with patch(
            "dairycart.services.progenitors.retrieve_progenitor",
            AsyncMock(return_value=progenitor),
        ):
            response = await client.get("/v1/product_progenitors/2")

        assert response.status_code == 200
        assert response.json()["name"] == "Skateboard"
        assert response.json()["price"] == 12.34

    @pytest.mark.asyncio
    async def test_missing_progenitor(self, client: AsyncClient):
        missing = AsyncMock(side_effect=NotFoundError("product progenitor", 99))
        with patch("dairycart.services.progenitors.retrieve_progenitor", missing):
            response = await client.get("/v1/product_progenitors/99")
        assert response.status_code == 404
