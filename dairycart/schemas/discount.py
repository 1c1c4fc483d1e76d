"""Discount schemas.

The wire name of ``discount_type`` is ``type``; both names are accepted on
input.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator, model_validator

from dairycart.config import settings
from dairycart.core.merge import round_to_precision
from dairycart.core.records import DISCOUNT_TYPES, Discount


def _check_discount_type(v: str) -> str:
    if v not in DISCOUNT_TYPES:
        raise ValueError(f"discount type must be one of {sorted(DISCOUNT_TYPES)}")
    return v


def _as_utc(v: datetime | None) -> datetime | None:
    """Naive datetimes are taken to be UTC."""
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class DiscountCreationInput(BaseModel):
    name: str = Field(min_length=1)
    discount_type: str = Field(alias="type", description="percentage or flat_amount")
    amount: float = Field(gt=0)
    product_id: int | None = None
    starts_on: datetime
    expires_on: datetime | None = None
    requires_code: bool = False
    code: str | None = None
    limited_use: bool = False
    number_of_uses: int | None = Field(default=None, ge=1)
    login_required: bool = False

    model_config = {"extra": "forbid", "populate_by_name": True}

    @field_validator("discount_type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        return _check_discount_type(v)

    @field_validator("starts_on", "expires_on")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    @field_validator("amount")
    @classmethod
    def round_amount(cls, v: float) -> float:
        return round_to_precision(v, settings.numeric_precision)

    @model_validator(mode="after")
    def validate_consistency(self) -> "DiscountCreationInput":
        if self.expires_on is not None and self.expires_on <= self.starts_on:
            raise ValueError("expires_on must be after starts_on")
        if self.requires_code and not self.code:
            raise ValueError("a discount that requires a code must have one")
        if self.limited_use and self.number_of_uses is None:
            raise ValueError("a limited use discount needs number_of_uses")
        return self

    def to_record(self) -> Discount:
        return Discount(
            name=self.name,
            discount_type=self.discount_type,
            amount=self.amount,
            product_id=self.product_id,
            starts_on=self.starts_on,
            expires_on=self.expires_on,
            requires_code=self.requires_code,
            code=self.code,
            limited_use=self.limited_use,
            number_of_uses=self.number_of_uses,
            login_required=self.login_required,
        )


class DiscountUpdateInput(BaseModel):
    """Partial discount update; zero-valued fields are left untouched."""

    name: str = ""
    discount_type: str = Field(default="", alias="type")
    amount: float = Field(default=0.0, ge=0)
    product_id: int = 0
    starts_on: datetime | None = None
    expires_on: datetime | None = None
    requires_code: bool = False
    code: str = ""
    limited_use: bool = False
    number_of_uses: int = Field(default=0, ge=0)
    login_required: bool = False

    model_config = {"extra": "forbid", "populate_by_name": True}

    @field_validator("discount_type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        return _check_discount_type(v) if v else v

    @field_validator("starts_on", "expires_on")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class DiscountResponse(BaseModel):
    id: int
    name: str
    discount_type: str = Field(serialization_alias="type")
    amount: float
    product_id: int | None = None
    starts_on: datetime | None = None
    expires_on: datetime | None = None
    requires_code: bool
    code: str | None = None
    limited_use: bool
    number_of_uses: int | None = None
    login_required: bool
    created_on: datetime | None = None
    updated_on: datetime | None = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, record: Discount) -> "DiscountResponse":
        return cls.model_validate(record)
