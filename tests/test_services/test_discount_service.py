"""Tests for discount creation and update flows."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from dairycart.core.errors import InvalidInputError
from dairycart.core.records import Discount
from dairycart.schemas.discount import DiscountCreationInput, DiscountUpdateInput
from dairycart.services import discounts as discounts_service

MODULE = "dairycart.services.discounts"

STARTS_ON = datetime(2017, 1, 1, tzinfo=timezone.utc)


def creation_input(**overrides) -> DiscountCreationInput:
    fields = {"name": "10 percent off", "type": "percentage", "amount": 10, "starts_on": STARTS_ON}
    fields.update(overrides)
    return DiscountCreationInput(**fields)


@pytest.fixture
def existing() -> Discount:
    return Discount(id=1, name="10 percent off", amount=10.0, starts_on=STARTS_ON)


class TestCreateDiscount:
    @pytest.mark.asyncio
    async def test_creates_without_product(self):
        with patch(f"{MODULE}.ExistenceGate") as gate_cls, \
             patch(f"{MODULE}.insert_one", AsyncMock(return_value=3)):
            discount = await discounts_service.create_discount(MagicMock(), creation_input())

        assert discount.id == 3
        gate_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_creates_for_existing_product(self):
        with patch(f"{MODULE}.ExistenceGate") as gate_cls, \
             patch(f"{MODULE}.insert_one", AsyncMock(return_value=3)):
            gate_cls.return_value.exists = AsyncMock(return_value=True)

            discount = await discounts_service.create_discount(
                MagicMock(), creation_input(product_id=10)
            )

        assert discount.product_id == 10
        gate_cls.return_value.exists.assert_awaited_once_with("products", "id", 10)

    @pytest.mark.asyncio
    async def test_unknown_product_rejected(self):
        insert_one = AsyncMock()
        with patch(f"{MODULE}.ExistenceGate") as gate_cls, \
             patch(f"{MODULE}.insert_one", insert_one):
            gate_cls.return_value.exists = AsyncMock(return_value=False)

            with pytest.raises(InvalidInputError) as exc_info:
                await discounts_service.create_discount(
                    MagicMock(), creation_input(product_id=999)
                )

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid input provided for discount product"
        insert_one.assert_not_awaited()


class TestUpdateDiscount:
    @pytest.mark.asyncio
    async def test_unknown_product_rejected(self, existing: Discount):
        update_one = AsyncMock()
        with patch(f"{MODULE}.retrieve_discount", AsyncMock(return_value=existing)), \
             patch(f"{MODULE}.ExistenceGate") as gate_cls, \
             patch(f"{MODULE}.update_one", update_one):
            gate_cls.return_value.exists = AsyncMock(return_value=False)

            with pytest.raises(InvalidInputError, match="discount product"):
                await discounts_service.update_discount(
                    MagicMock(), 1, DiscountUpdateInput(product_id=999)
                )

        update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_without_product_skips_check(self, existing: Discount):
        update_one = AsyncMock(side_effect=lambda session, layout, original, merged: merged)
        with patch(f"{MODULE}.retrieve_discount", AsyncMock(return_value=existing)), \
             patch(f"{MODULE}.ExistenceGate") as gate_cls, \
             patch(f"{MODULE}.update_one", update_one):
            updated = await discounts_service.update_discount(
                MagicMock(), 1, DiscountUpdateInput(amount=15)
            )

        assert updated.amount == 15.0
        gate_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_inverted_dates_rejected(self, existing: Discount):
        with patch(f"{MODULE}.retrieve_discount", AsyncMock(return_value=existing)):
            with pytest.raises(InvalidInputError, match="expiration"):
                await discounts_service.update_discount(
                    MagicMock(),
                    1,
                    DiscountUpdateInput(expires_on=datetime(2016, 1, 1, tzinfo=timezone.utc)),
                )
