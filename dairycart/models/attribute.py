"""Product attribute and attribute value models."""

from sqlalchemy import ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from dairycart.models.base import Base, TimestampMixin


class ProductAttribute(Base, TimestampMixin):
    """A variant dimension such as "color" or "size"."""

    __tablename__ = "product_attributes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    product_progenitor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("product_progenitors.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<ProductAttribute(id={self.id}, name='{self.name}')>"


class ProductAttributeValue(Base, TimestampMixin):
    """One value of an attribute, unique per attribute among unarchived rows."""

    __tablename__ = "product_attribute_values"
    __table_args__ = (
        Index(
            "product_attribute_values_value_active_key",
            "product_attribute_id",
            "value",
            unique=True,
            postgresql_where=text("archived_on IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_attribute_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("product_attributes.id"),
        nullable=False,
        index=True,
    )
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<ProductAttributeValue(id={self.id}, value='{self.value}')>"
