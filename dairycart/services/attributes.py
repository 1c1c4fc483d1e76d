"""Product attributes and their values."""

from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.core.creation_pipeline import CreationPipeline
from dairycart.core.errors import InvalidInputError
from dairycart.core.existence import ExistenceGate
from dairycart.core.filters import QueryFilter
from dairycart.core.layouts import ATTRIBUTE_LAYOUT, ATTRIBUTE_VALUE_LAYOUT, PROGENITOR_LAYOUT
from dairycart.core.merge import ensure_not_empty, merge
from dairycart.core.records import ProductAttribute, ProductAttributeValue
from dairycart.infra.logging import get_logger
from dairycart.schemas.attribute import (
    AttributeCreationInput,
    AttributeValueCreationInput,
    AttributeValueUpdateInput,
)
from dairycart.services.base import (
    archive_one,
    ensure_exists,
    insert_one,
    list_page,
    retrieve_many,
    retrieve_one,
    update_one,
)

logger = get_logger(__name__)


async def list_attributes(
    session: AsyncSession,
    progenitor_id: int,
    query_filter: QueryFilter,
) -> tuple[int, list[ProductAttribute]]:
    """One page of a progenitor's attributes, each with its values attached."""
    total, attributes = await list_page(
        session,
        ATTRIBUTE_LAYOUT,
        query_filter,
        conditions={"product_progenitor_id": progenitor_id},
    )
    for attribute in attributes:
        attribute.values = await retrieve_many(
            session, ATTRIBUTE_VALUE_LAYOUT, "product_attribute_id", attribute.id
        )
    return total, attributes


async def attribute_value_exists(session: AsyncSession, attribute_id: int, value: str) -> bool:
    return await ExistenceGate(session).exists_where(
        ATTRIBUTE_VALUE_LAYOUT.table,
        {"product_attribute_id": attribute_id, "value": value},
    )


async def create_attributes(
    session: AsyncSession,
    pipeline: CreationPipeline,
    progenitor_id: int,
    groups: list[AttributeCreationInput],
) -> list[ProductAttribute]:
    """Create attributes (with values) for an existing progenitor.

    Raises:
        NotFoundError: If the progenitor does not exist
        InvalidInputError: If the progenitor already has an attribute of that name
    """
    await ensure_exists(session, PROGENITOR_LAYOUT, "id", progenitor_id)

    gate = ExistenceGate(session)
    for group in groups:
        taken = await gate.exists_where(
            ATTRIBUTE_LAYOUT.table,
            {"product_progenitor_id": progenitor_id, "name": group.name},
        )
        if taken:
            raise InvalidInputError(f"product attribute `{group.name}` already exists")

    return await pipeline.create_attributes(progenitor_id, groups)


async def create_attribute_value(
    session: AsyncSession,
    attribute_id: int,
    data: AttributeValueCreationInput,
) -> ProductAttributeValue:
    """Add a value to an attribute.

    Raises:
        NotFoundError: If the attribute does not exist
        InvalidInputError: If the attribute already has this value
    """
    await ensure_exists(session, ATTRIBUTE_LAYOUT, "id", attribute_id)
    if await attribute_value_exists(session, attribute_id, data.value):
        raise InvalidInputError(f"product attribute value `{data.value}` already exists")

    value = ProductAttributeValue(attribute_id=attribute_id, value=data.value)
    value.id = await insert_one(session, ATTRIBUTE_VALUE_LAYOUT, value)

    logger.info("Attribute value created", attribute_id=attribute_id, value_id=value.id)
    return value


async def update_attribute_value(
    session: AsyncSession,
    value_id: int,
    update: AttributeValueUpdateInput,
) -> ProductAttributeValue:
    ensure_not_empty(update, "product attribute value")
    existing = await retrieve_one(session, ATTRIBUTE_VALUE_LAYOUT, "id", value_id)

    if update.value != existing.value and await attribute_value_exists(
        session, existing.attribute_id, update.value
    ):
        raise InvalidInputError(f"product attribute value `{update.value}` already exists")

    return await update_one(session, ATTRIBUTE_VALUE_LAYOUT, existing, merge(update, existing))


async def archive_attribute_value(session: AsyncSession, value_id: int) -> None:
    await archive_one(session, ATTRIBUTE_VALUE_LAYOUT, "id", value_id)
