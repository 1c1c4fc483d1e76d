"""User schemas. Password and salt never leave the service."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dairycart.config import settings
from dairycart.core.records import User


class UserCreationInput(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str
    is_admin: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        local, _, domain = v.strip().partition("@")
        if not local or "." not in domain or domain.startswith(".") or domain.endswith("."):
            raise ValueError("email address is not valid")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < settings.password_min_length:
            raise ValueError(
                f"password must be at least {settings.password_min_length} characters long"
            )
        return v


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    is_admin: bool
    created_on: datetime | None = None
    updated_on: datetime | None = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, record: User) -> "UserResponse":
        return cls.model_validate(record)
