"""User model."""

from sqlalchemy import Boolean, Index, Integer, LargeBinary, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from dairycart.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """User account. ``password`` holds a salted bcrypt hash."""

    __tablename__ = "users"
    __table_args__ = (
        Index(
            "users_email_active_key",
            "email",
            unique=True,
            postgresql_where=text("archived_on IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    salt: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
