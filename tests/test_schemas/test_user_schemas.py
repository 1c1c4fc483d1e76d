"""Tests for user schemas."""

import pytest
from pydantic import ValidationError

from dairycart.core.records import User
from dairycart.schemas.user import UserCreationInput, UserResponse

STRONG_PASSWORD = "password" * 8


class TestUserCreationInput:
    def test_valid(self):
        data = UserCreationInput(
            first_name="Frank",
            last_name="Zappa",
            email=" frank@zappa.com ",
            password=STRONG_PASSWORD,
        )
        assert data.email == "frank@zappa.com"
        assert data.is_admin is False

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            UserCreationInput(
                first_name="Frank", last_name="Zappa", email="frank@zappa.com", password="password"
            )

    @pytest.mark.parametrize("email", ["frank", "frank@", "@zappa.com", "frank@zappa", "frank@.com"])
    def test_invalid_email_rejected(self, email: str):
        with pytest.raises(ValidationError):
            UserCreationInput(
                first_name="Frank", last_name="Zappa", email=email, password=STRONG_PASSWORD
            )


class TestUserResponse:
    def test_never_exposes_secrets(self):
        user = User(
            id=1,
            first_name="Frank",
            last_name="Zappa",
            email="frank@zappa.com",
            password="$2b$13$hash",
            salt=b"salt",
        )

        body = UserResponse.from_record(user).model_dump()

        assert "password" not in body
        assert "salt" not in body
        assert body["email"] == "frank@zappa.com"
