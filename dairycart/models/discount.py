"""Discount model.

The allowed ``discount_type`` values are enforced by the application, not
by the database.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from dairycart.models.base import Base, TimestampMixin


class Discount(Base, TimestampMixin):
    __tablename__ = "discounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    discount_type: Mapped[str] = mapped_column(Text, nullable=False, default="percentage")
    amount: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False)
    product_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("products.id"),
        nullable=True,
    )
    starts_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    requires_code: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    code: Mapped[str | None] = mapped_column(Text, nullable=True)
    limited_use: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    number_of_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    login_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Discount(id={self.id}, name='{self.name}', type='{self.discount_type}')>"
