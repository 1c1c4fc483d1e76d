"""Product model - a purchasable variant of a progenitor."""

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from dairycart.models.base import Base, TimestampMixin


class Product(Base, TimestampMixin):
    """Product row. SKUs are unique among unarchived products."""

    __tablename__ = "products"
    __table_args__ = (
        Index(
            "products_sku_active_key",
            "sku",
            unique=True,
            postgresql_where=text("archived_on IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_progenitor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("product_progenitors.id"),
        nullable=False,
        index=True,
    )
    sku: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    upc: Mapped[str | None] = mapped_column(String(20), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)
    cost: Mapped[float] = mapped_column(Numeric(15, 2), nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, sku='{self.sku}')>"
