"""Product attribute and attribute value schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dairycart.core.records import ProductAttribute, ProductAttributeValue


class AttributeCreationInput(BaseModel):
    """An attribute and its values, e.g. ``{"name": "color", "values": ["red"]}``."""

    name: str = Field(min_length=1, description="Attribute name")
    values: list[str] = Field(default_factory=list, description="Values of the attribute")

    model_config = {"extra": "forbid"}

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: list[str]) -> list[str]:
        """Values must be non-empty and unique within the attribute."""
        if any(not value for value in v):
            raise ValueError("attribute values must not be empty")
        if len(set(v)) != len(v):
            raise ValueError("attribute values must be unique")
        return v


class AttributeValueCreationInput(BaseModel):
    value: str = Field(min_length=1, description="Attribute value")

    model_config = {"extra": "forbid"}


class AttributeValueUpdateInput(BaseModel):
    value: str = Field(default="", description="New attribute value")

    model_config = {"extra": "forbid"}


class AttributeValueResponse(BaseModel):
    id: int
    product_attribute_id: int
    value: str
    created_on: datetime | None = None
    updated_on: datetime | None = None

    @classmethod
    def from_record(cls, record: ProductAttributeValue) -> "AttributeValueResponse":
        return cls(
            id=record.id,
            product_attribute_id=record.attribute_id,
            value=record.value,
            created_on=record.created_on,
            updated_on=record.updated_on,
        )


class AttributeResponse(BaseModel):
    id: int
    name: str
    product_progenitor_id: int
    values: list[AttributeValueResponse] = Field(default_factory=list)
    created_on: datetime | None = None
    updated_on: datetime | None = None

    @classmethod
    def from_record(cls, record: ProductAttribute) -> "AttributeResponse":
        return cls(
            id=record.id,
            name=record.name,
            product_progenitor_id=record.progenitor_id,
            values=[AttributeValueResponse.from_record(v) for v in record.values],
            created_on=record.created_on,
            updated_on=record.updated_on,
        )
