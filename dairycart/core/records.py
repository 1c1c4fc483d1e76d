"""Typed records for the rows the service reads and writes.

Nullable columns are typed ``X | None``: ``None`` means the column is NULL,
which stays distinguishable from a real zero or empty string.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

DiscountType = Literal["percentage", "flat_amount"]
DISCOUNT_TYPES: frozenset[str] = frozenset({"percentage", "flat_amount"})


@dataclass
class Progenitor:
    """Shared base-product record holding pricing and dimension data."""

    id: int | None = None
    name: str = ""
    description: str = ""
    taxable: bool = False
    price: float = 0.0

    product_weight: float = 0.0
    product_height: float = 0.0
    product_width: float = 0.0
    product_length: float = 0.0

    package_weight: float = 0.0
    package_height: float = 0.0
    package_width: float = 0.0
    package_length: float = 0.0

    created_on: datetime | None = None
    updated_on: datetime | None = None
    archived_on: datetime | None = None


@dataclass
class Product:
    """Something a user can buy.

    Stores only its own columns; the progenitor is attached by composition
    when the row was read through the product/progenitor join.
    """

    id: int | None = None
    progenitor_id: int | None = None
    sku: str = ""
    name: str = ""
    upc: str | None = None
    quantity: int = 0
    price: float = 0.0
    cost: float = 0.0

    created_on: datetime | None = None
    updated_on: datetime | None = None
    archived_on: datetime | None = None

    progenitor: Progenitor | None = None


@dataclass
class ProductAttributeValue:
    id: int | None = None
    attribute_id: int | None = None
    value: str = ""

    created_on: datetime | None = None
    updated_on: datetime | None = None
    archived_on: datetime | None = None


@dataclass
class ProductAttribute:
    """A variant dimension (e.g. "color") belonging to one progenitor."""

    id: int | None = None
    name: str = ""
    progenitor_id: int | None = None

    created_on: datetime | None = None
    updated_on: datetime | None = None
    archived_on: datetime | None = None

    values: list[ProductAttributeValue] = field(default_factory=list)


@dataclass
class Discount:
    """Pricing change that applies temporarily to products."""

    id: int | None = None
    name: str = ""
    discount_type: str = "percentage"
    amount: float = 0.0
    product_id: int | None = None
    starts_on: datetime | None = None
    expires_on: datetime | None = None
    requires_code: bool = False
    code: str | None = None
    limited_use: bool = False
    number_of_uses: int | None = None
    login_required: bool = False

    created_on: datetime | None = None
    updated_on: datetime | None = None
    archived_on: datetime | None = None


@dataclass
class User:
    id: int | None = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    salt: bytes = b""
    is_admin: bool = False

    created_on: datetime | None = None
    updated_on: datetime | None = None
    archived_on: datetime | None = None


@dataclass
class CreatedProduct:
    """Everything the creation pipeline persisted for one product."""

    product: Product
    attributes: list[ProductAttribute] = field(default_factory=list)
