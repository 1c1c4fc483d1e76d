"""Discount reads, writes and archiving."""

from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.core.errors import InvalidInputError
from dairycart.core.existence import ExistenceGate
from dairycart.core.filters import QueryFilter
from dairycart.core.layouts import DISCOUNT_LAYOUT, PRODUCT_LAYOUT
from dairycart.core.merge import ensure_not_empty, merge
from dairycart.core.records import DISCOUNT_TYPES, Discount
from dairycart.infra.logging import get_logger
from dairycart.schemas.discount import DiscountCreationInput, DiscountUpdateInput
from dairycart.services.base import archive_one, insert_one, list_page, retrieve_one, update_one

logger = get_logger(__name__)


def discount_type_is_valid(discount: Discount) -> bool:
    return discount.discount_type in DISCOUNT_TYPES


async def ensure_product_exists(session: AsyncSession, product_id: int) -> None:
    """A discount may only point at an unarchived product."""
    if not await ExistenceGate(session).exists(PRODUCT_LAYOUT.table, "id", product_id):
        raise InvalidInputError("Invalid input provided for discount product")


async def retrieve_discount(session: AsyncSession, discount_id: int) -> Discount:
    return await retrieve_one(session, DISCOUNT_LAYOUT, "id", discount_id)


async def list_discounts(session: AsyncSession, query_filter: QueryFilter) -> tuple[int, list[Discount]]:
    return await list_page(session, DISCOUNT_LAYOUT, query_filter)


async def create_discount(session: AsyncSession, data: DiscountCreationInput) -> Discount:
    discount = data.to_record()
    if not discount_type_is_valid(discount):
        raise InvalidInputError("Invalid input provided for discount type")
    if discount.product_id is not None:
        await ensure_product_exists(session, discount.product_id)

    discount.id = await insert_one(session, DISCOUNT_LAYOUT, discount)
    logger.info("Discount created", discount_id=discount.id, discount_type=discount.discount_type)
    return discount


async def update_discount(
    session: AsyncSession,
    discount_id: int,
    update: DiscountUpdateInput,
) -> Discount:
    """Merge a partial update onto a stored discount.

    Raises:
        InvalidInputError: Empty body, bad type, inverted date range or unknown product
        NotFoundError: If the discount does not exist
    """
    ensure_not_empty(update, "discount")
    existing = await retrieve_discount(session, discount_id)

    merged = merge(update, existing)
    if not discount_type_is_valid(merged):
        raise InvalidInputError("Invalid input provided for discount type")
    if merged.expires_on is not None and merged.starts_on is not None:
        if merged.expires_on <= merged.starts_on:
            raise InvalidInputError("Invalid input provided for discount expiration")
    if update.product_id:
        await ensure_product_exists(session, update.product_id)

    updated = await update_one(session, DISCOUNT_LAYOUT, existing, merged)
    logger.info("Discount updated", discount_id=discount_id)
    return updated


async def archive_discount(session: AsyncSession, discount_id: int) -> None:
    await archive_one(session, DISCOUNT_LAYOUT, "id", discount_id)
