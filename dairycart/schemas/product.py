"""Product and progenitor schemas.

Requests decode into these models; responses flatten a ``Product`` and its
``Progenitor`` into a single JSON object.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dairycart.config import settings
from dairycart.core.merge import round_to_precision
from dairycart.core.records import CreatedProduct, Product, Progenitor
from dairycart.schemas.attribute import AttributeCreationInput, AttributeResponse

_NUMERIC_FIELDS = (
    "price",
    "cost",
    "product_weight",
    "product_height",
    "product_width",
    "product_length",
    "package_weight",
    "package_height",
    "package_width",
    "package_length",
)


class ProductCreationInput(BaseModel):
    """Product creation body.

    Carries the progenitor fields (description, taxable, dimensions), the
    product's own fields and any attributes with their values.
    """

    sku: str = Field(min_length=1, description="Unique SKU (letters, hyphen, underscore)")
    name: str = Field(min_length=1, description="Product name")
    upc: str = Field(default="", description="Universal product code")
    quantity: int = Field(default=0, ge=0)
    price: float = Field(default=0.0, ge=0)
    cost: float = Field(default=0.0, ge=0)

    description: str = ""
    taxable: bool = False
    product_weight: float = Field(default=0.0, ge=0)
    product_height: float = Field(default=0.0, ge=0)
    product_width: float = Field(default=0.0, ge=0)
    product_length: float = Field(default=0.0, ge=0)
    package_weight: float = Field(default=0.0, ge=0)
    package_height: float = Field(default=0.0, ge=0)
    package_width: float = Field(default=0.0, ge=0)
    package_length: float = Field(default=0.0, ge=0)

    attributes_and_values: list[AttributeCreationInput] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @field_validator(*_NUMERIC_FIELDS)
    @classmethod
    def round_numeric(cls, v: float) -> float:
        return round_to_precision(v, settings.numeric_precision)


class ProductUpdateInput(BaseModel):
    """Partial product update; zero-valued fields are left untouched."""

    sku: str = ""
    name: str = ""
    upc: str = ""
    quantity: int = Field(default=0, ge=0)
    price: float = Field(default=0.0, ge=0)
    cost: float = Field(default=0.0, ge=0)

    model_config = {"extra": "forbid"}


class ProgenitorResponse(BaseModel):
    id: int
    name: str
    description: str
    taxable: bool
    price: float
    product_weight: float
    product_height: float
    product_width: float
    product_length: float
    package_weight: float
    package_height: float
    package_width: float
    package_length: float
    created_on: datetime | None = None
    updated_on: datetime | None = None

    model_config = {"from_attributes": True}


class ProductResponse(BaseModel):
    """Product joined with its progenitor, flattened.

    Where both records share a field (id, name, price, timestamps) the
    product's own value wins.
    """

    id: int
    product_progenitor_id: int
    sku: str
    name: str
    upc: str | None = None
    quantity: int
    price: float
    cost: float

    description: str = ""
    taxable: bool = False
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

    @classmethod
    def from_record(cls, product: Product) -> "ProductResponse":
        return cls(**flatten_product(product))


class CreatedProductResponse(ProductResponse):
    attributes: list[AttributeResponse] = Field(default_factory=list)

    @classmethod
    def from_created(cls, created: CreatedProduct) -> "CreatedProductResponse":
        return cls(
            **flatten_product(created.product),
            attributes=[AttributeResponse.from_record(a) for a in created.attributes],
        )


def flatten_product(product: Product) -> dict:
    """Merge progenitor and product fields into one mapping."""
    progenitor = product.progenitor or Progenitor()
    return {
        "description": progenitor.description,
        "taxable": progenitor.taxable,
        "product_weight": progenitor.product_weight,
        "product_height": progenitor.product_height,
        "product_width": progenitor.product_width,
        "product_length": progenitor.product_length,
        "package_weight": progenitor.package_weight,
        "package_height": progenitor.package_height,
        "package_width": progenitor.package_width,
        "package_length": progenitor.package_length,
        "id": product.id,
        "product_progenitor_id": product.progenitor_id,
        "sku": product.sku,
        "name": product.name,
        "upc": product.upc,
        "quantity": product.quantity,
        "price": product.price,
        "cost": product.cost,
        "created_on": product.created_on,
        "updated_on": product.updated_on,
    }
