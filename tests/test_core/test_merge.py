"""Tests for partial-update merging and rounding."""

import pytest

from dairycart.core.errors import InvalidInputError
from dairycart.core.merge import ensure_not_empty, is_empty_update, merge, round_to_precision
from dairycart.core.records import Product, Progenitor
from dairycart.schemas.product import ProductUpdateInput


@pytest.fixture
def existing() -> Product:
    return Product(
        id=10,
        progenitor_id=2,
        sku="skateboard",
        name="Skateboard",
        upc="1234567890",
        quantity=123,
        price=12.34,
        cost=5.0,
        progenitor=Progenitor(id=2, name="Skateboard"),
    )


class TestRoundToPrecision:
    def test_two_places(self):
        assert round_to_precision(1.23456789, 2) == 1.23

    def test_three_places(self):
        assert round_to_precision(1.23456789, 3) == 1.235

    def test_halves_round_away_from_zero(self):
        assert round_to_precision(0.125, 2) == 0.13
        assert round_to_precision(2.675, 2) == 2.68

    def test_integral_values_unchanged(self):
        assert round_to_precision(8.0, 2) == 8.0


class TestMerge:
    def test_all_zero_update_is_identity(self, existing: Product):
        merged = merge(ProductUpdateInput(), existing)
        assert merged == existing

    def test_non_zero_fields_overwrite(self, existing: Product):
        merged = merge(ProductUpdateInput(quantity=666, name="Longboard"), existing)

        assert merged.quantity == 666
        assert merged.name == "Longboard"
        assert merged.sku == "skateboard"
        assert merged.price == 12.34

    def test_existing_is_not_modified(self, existing: Product):
        merge(ProductUpdateInput(quantity=666), existing)
        assert existing.quantity == 123

    def test_progenitor_is_kept(self, existing: Product):
        merged = merge(ProductUpdateInput(quantity=1), existing)
        assert merged.progenitor is existing.progenitor

    def test_floats_are_rounded(self, existing: Product):
        merged = merge(ProductUpdateInput(price=1.23456789), existing)
        assert merged.price == 1.23

    def test_precision_override(self, existing: Product):
        merged = merge({"cost": 1.23456789}, existing, precision=3)
        assert merged.cost == 1.235

    def test_zero_cannot_be_written(self, existing: Product):
        # zero means "omitted", so the stored value survives
        merged = merge({"quantity": 0}, existing)
        assert merged.quantity == 123

    def test_unknown_field_rejected(self, existing: Product):
        with pytest.raises(ValueError):
            merge({"colour": "red"}, existing)


class TestEnsureNotEmpty:
    def test_empty_update(self):
        assert is_empty_update(ProductUpdateInput())
        with pytest.raises(InvalidInputError, match="Invalid input provided for product body"):
            ensure_not_empty(ProductUpdateInput(), "product")

    def test_non_empty_update(self):
        ensure_not_empty(ProductUpdateInput(sku="longboard"), "product")
        assert not is_empty_update({"quantity": 1})

    def test_unsupported_update_type(self):
        with pytest.raises(TypeError):
            is_empty_update(42)
