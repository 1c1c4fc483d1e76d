"""Pydantic schemas for request/response validation."""

from dairycart.schemas.attribute import (
    AttributeCreationInput,
    AttributeResponse,
    AttributeValueCreationInput,
    AttributeValueResponse,
    AttributeValueUpdateInput,
)
from dairycart.schemas.common import ErrorResponse, HealthResponse, ListResponse
from dairycart.schemas.discount import (
    DiscountCreationInput,
    DiscountResponse,
    DiscountUpdateInput,
)
from dairycart.schemas.product import (
    CreatedProductResponse,
    ProductCreationInput,
    ProductResponse,
    ProductUpdateInput,
    ProgenitorResponse,
)
from dairycart.schemas.user import UserCreationInput, UserResponse

__all__ = [
    "AttributeCreationInput",
    "AttributeResponse",
    "AttributeValueCreationInput",
    "AttributeValueResponse",
    "AttributeValueUpdateInput",
    "ErrorResponse",
    "HealthResponse",
    "ListResponse",
    "DiscountCreationInput",
    "DiscountResponse",
    "DiscountUpdateInput",
    "CreatedProductResponse",
    "ProductCreationInput",
    "ProductResponse",
    "ProductUpdateInput",
    "ProgenitorResponse",
    "UserCreationInput",
    "UserResponse",
]
