"""Product progenitor model - shared base of a product and its variants."""

from sqlalchemy import Boolean, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from dairycart.models.base import Base, TimestampMixin


class ProductProgenitor(Base, TimestampMixin):
    """Pricing, tax and dimension data shared by a product's variants."""

    __tablename__ = "product_progenitors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    taxable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    price: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    product_weight: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    product_height: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    product_width: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    product_length: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    package_weight: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    package_height: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    package_width: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    package_length: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<ProductProgenitor(id={self.id}, name='{self.name}')>"
