"""Product reads, partial updates and archiving.

Creation lives in ``CreationPipeline``; everything here runs on the
request session.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.core.errors import InvalidInputError
from dairycart.core.existence import ExistenceGate
from dairycart.core.filters import QueryFilter
from dairycart.core.layouts import PRODUCT_LAYOUT, PRODUCT_WITH_PROGENITOR_LAYOUT
from dairycart.core.merge import ensure_not_empty, merge
from dairycart.core.records import Product
from dairycart.core.validation import SkuValidator
from dairycart.infra.logging import get_logger
from dairycart.schemas.product import ProductCreationInput, ProductUpdateInput
from dairycart.services.base import (
    archive_one,
    ensure_exists,
    list_page,
    retrieve_one,
    update_one,
)

logger = get_logger(__name__)


async def product_exists(session: AsyncSession, sku: str) -> bool:
    return await ExistenceGate(session).exists(PRODUCT_LAYOUT.table, "sku", sku)


async def retrieve_product(session: AsyncSession, sku: str) -> Product:
    """Fetch a product with its progenitor attached.

    Raises:
        NotFoundError: If no unarchived product has this SKU
    """
    return await retrieve_one(session, PRODUCT_WITH_PROGENITOR_LAYOUT, "sku", sku)


async def list_products(session: AsyncSession, query_filter: QueryFilter) -> tuple[int, list[Product]]:
    return await list_page(session, PRODUCT_WITH_PROGENITOR_LAYOUT, query_filter)


async def validate_new_product(
    session: AsyncSession,
    data: ProductCreationInput,
    sku_validator: SkuValidator,
) -> None:
    """Check a creation body before the pipeline runs.

    Raises:
        InvalidInputError: If the SKU is malformed or already taken
    """
    sku_validator.validate(data.sku)
    if await product_exists(session, data.sku):
        raise InvalidInputError(f"product with sku `{data.sku}` already exists")


async def update_product(
    session: AsyncSession,
    sku: str,
    update: ProductUpdateInput,
    sku_validator: SkuValidator,
) -> Product:
    """Merge a partial update onto the stored product and persist the diff.

    Args:
        session: Request database session
        sku: SKU of the product to update
        update: Partial update; zero-valued fields are ignored
        sku_validator: Validator for a replacement SKU

    Returns:
        Updated product with its progenitor attached

    Raises:
        InvalidInputError: Empty body, malformed SKU or SKU already in use
        NotFoundError: If the product does not exist
    """
    await ensure_exists(session, PRODUCT_LAYOUT, "sku", sku)

    ensure_not_empty(update, "product")
    if update.sku:
        sku_validator.validate(update.sku)

    existing = await retrieve_product(session, sku)

    if update.sku and update.sku != sku and await product_exists(session, update.sku):
        raise InvalidInputError(f"product with sku `{update.sku}` already exists")

    merged = merge(update, existing)
    updated = await update_one(session, PRODUCT_LAYOUT, existing, merged)
    updated.progenitor = existing.progenitor

    logger.info("Product updated", sku=sku, new_sku=updated.sku, product_id=updated.id)
    return updated


async def archive_product(session: AsyncSession, sku: str) -> None:
    await archive_one(session, PRODUCT_LAYOUT, "sku", sku)
