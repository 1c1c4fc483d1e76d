"""Column layouts for every table the service touches.

The order of each tuple is the order queries select columns in and the order
result rows are mapped back. Keep it in sync with ``dairycart.models``.
"""

from dairycart.core.records import (
    Discount,
    Product,
    ProductAttribute,
    ProductAttributeValue,
    Progenitor,
    User,
)
from dairycart.core.row_mapper import ColumnDescriptor as C
from dairycart.core.row_mapper import EntityLayout, JoinedLayout

HOUSEKEEPING = (
    C("created_on", "created_on", generated=True),
    C("updated_on", "updated_on", nullable=True, generated=True),
    C("archived_on", "archived_on", nullable=True, generated=True),
)

PROGENITOR_LAYOUT = EntityLayout(
    entity="product progenitor",
    table="product_progenitors",
    alias="g",
    record=Progenitor,
    columns=(
        C("id", "id", generated=True),
        C("name", "name"),
        C("description", "description"),
        C("taxable", "taxable"),
        C("price", "price", converter=float),
        C("product_weight", "product_weight", converter=float),
        C("product_height", "product_height", converter=float),
        C("product_width", "product_width", converter=float),
        C("product_length", "product_length", converter=float),
        C("package_weight", "package_weight", converter=float),
        C("package_height", "package_height", converter=float),
        C("package_width", "package_width", converter=float),
        C("package_length", "package_length", converter=float),
        *HOUSEKEEPING,
    ),
)

PRODUCT_LAYOUT = EntityLayout(
    entity="product",
    table="products",
    alias="p",
    record=Product,
    columns=(
        C("id", "id", generated=True),
        C("product_progenitor_id", "progenitor_id"),
        C("sku", "sku"),
        C("name", "name"),
        C("upc", "upc", nullable=True),
        C("quantity", "quantity"),
        C("price", "price", converter=float),
        C("cost", "cost", converter=float),
        *HOUSEKEEPING,
    ),
)

PRODUCT_WITH_PROGENITOR_LAYOUT = JoinedLayout(
    primary=PRODUCT_LAYOUT,
    secondary=PROGENITOR_LAYOUT,
    join_column="product_progenitor_id",
    attach_as="progenitor",
)

ATTRIBUTE_LAYOUT = EntityLayout(
    entity="product attribute",
    table="product_attributes",
    alias="a",
    record=ProductAttribute,
    columns=(
        C("id", "id", generated=True),
        C("name", "name"),
        C("product_progenitor_id", "progenitor_id"),
        *HOUSEKEEPING,
    ),
)

ATTRIBUTE_VALUE_LAYOUT = EntityLayout(
    entity="product attribute value",
    table="product_attribute_values",
    alias="v",
    record=ProductAttributeValue,
    columns=(
        C("id", "id", generated=True),
        C("product_attribute_id", "attribute_id"),
        C("value", "value"),
        *HOUSEKEEPING,
    ),
)

DISCOUNT_LAYOUT = EntityLayout(
    entity="discount",
    table="discounts",
    alias="d",
    record=Discount,
    columns=(
        C("id", "id", generated=True),
        C("name", "name"),
        C("discount_type", "discount_type"),
        C("amount", "amount", converter=float),
        C("product_id", "product_id", nullable=True),
        C("starts_on", "starts_on"),
        C("expires_on", "expires_on", nullable=True),
        C("requires_code", "requires_code"),
        C("code", "code", nullable=True),
        C("limited_use", "limited_use"),
        C("number_of_uses", "number_of_uses", nullable=True),
        C("login_required", "login_required"),
        *HOUSEKEEPING,
    ),
)

USER_LAYOUT = EntityLayout(
    entity="user",
    table="users",
    alias="u",
    record=User,
    columns=(
        C("id", "id", generated=True),
        C("first_name", "first_name"),
        C("last_name", "last_name"),
        C("email", "email"),
        C("password", "password"),
        C("salt", "salt", converter=bytes),
        C("is_admin", "is_admin"),
        *HOUSEKEEPING,
    ),
)

LAYOUTS: dict[str, EntityLayout] = {
    layout.table: layout
    for layout in (
        PROGENITOR_LAYOUT,
        PRODUCT_LAYOUT,
        ATTRIBUTE_LAYOUT,
        ATTRIBUTE_VALUE_LAYOUT,
        DISCOUNT_LAYOUT,
        USER_LAYOUT,
    )
}


def get_layout(table: str) -> EntityLayout:
    """Look up a registered layout by table name.

    Raises:
        ValueError: If the table is not registered
    """
    try:
        return LAYOUTS[table]
    except KeyError:
        raise ValueError(f"unknown table {table!r}") from None
