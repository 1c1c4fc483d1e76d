"""Transactional creation of a product and its variant structure.

A product is created in one transaction, in this order:

    begin -> progenitor -> attributes (each followed by its values) -> product -> commit

Any failure rolls the transaction back. A row rejected by a unique index
(a SKU or attribute value taken by a concurrent request) surfaces as
``InvalidInputError``; everything else as ``InternalError``. Nothing is
retried.
"""

import enum
from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.core.errors import InternalError, InvalidInputError
from dairycart.core.layouts import (
    ATTRIBUTE_LAYOUT,
    ATTRIBUTE_VALUE_LAYOUT,
    PRODUCT_LAYOUT,
    PROGENITOR_LAYOUT,
)
from dairycart.core.query_builder import build_insert_query
from dairycart.core.records import (
    CreatedProduct,
    Product,
    ProductAttribute,
    ProductAttributeValue,
    Progenitor,
)
from dairycart.core.row_mapper import EntityLayout
from dairycart.infra.database import execute_query, is_unique_violation
from dairycart.infra.logging import get_logger

if TYPE_CHECKING:
    from dairycart.schemas.attribute import AttributeCreationInput
    from dairycart.schemas.product import ProductCreationInput

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class PipelineState(enum.Enum):
    STARTED = "started"
    PROGENITOR_CREATED = "progenitor_created"
    ATTRIBUTES_CREATED = "attributes_created"
    PRODUCT_CREATED = "product_created"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


BEGIN_ACTION = "create new database transaction"
COMMIT_ACTION = "commit transaction"
DUPLICATE_VALUE_MESSAGE = "product attribute value already exists"

# What was being attempted when a failure happened in a given state.
FAILED_ACTIONS: dict[PipelineState, str] = {
    PipelineState.STARTED: "insert product progenitor in database",
    PipelineState.PROGENITOR_CREATED: "insert product attributes and values in database",
    PipelineState.ATTRIBUTES_CREATED: "insert product in database",
    PipelineState.PRODUCT_CREATED: COMMIT_ACTION,
}


async def insert_record(session: AsyncSession, layout: EntityLayout, record: Any) -> int:
    """Insert ``record`` into its table and return the generated id."""
    result = await execute_query(session, build_insert_query(layout, record))
    return int(result.scalar_one())


async def insert_attribute_with_values(
    session: AsyncSession,
    group: "AttributeCreationInput",
    progenitor_id: int,
) -> ProductAttribute:
    """Insert one attribute, then each of its values in submitted order."""
    attribute = ProductAttribute(name=group.name, progenitor_id=progenitor_id)
    attribute.id = await insert_record(session, ATTRIBUTE_LAYOUT, attribute)

    for value in group.values:
        attribute_value = ProductAttributeValue(attribute_id=attribute.id, value=value)
        attribute_value.id = await insert_record(session, ATTRIBUTE_VALUE_LAYOUT, attribute_value)
        attribute.values.append(attribute_value)

    return attribute


def new_progenitor_from_input(data: "ProductCreationInput") -> Progenitor:
    return Progenitor(
        name=data.name,
        description=data.description,
        taxable=data.taxable,
        price=data.price,
        product_weight=data.product_weight,
        product_height=data.product_height,
        product_width=data.product_width,
        product_length=data.product_length,
        package_weight=data.package_weight,
        package_height=data.package_height,
        package_width=data.package_width,
        package_length=data.package_length,
    )


def new_product_from_input(progenitor: Progenitor, data: "ProductCreationInput") -> Product:
    """Build the product row; an empty UPC is stored as NULL."""
    return Product(
        progenitor_id=progenitor.id,
        sku=data.sku,
        name=data.name,
        upc=data.upc or None,
        quantity=data.quantity,
        price=data.price,
        cost=data.cost,
        progenitor=progenitor,
    )


class CreationPipeline:
    """Runs multi-row inserts inside a single transaction.

    Each call opens its own session from ``session_factory`` so the
    transaction boundary is owned here and not by the request.
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def create_product(self, data: "ProductCreationInput") -> CreatedProduct:
        """Create progenitor, attributes, values and product atomically.

        Args:
            data: Validated creation input (SKU already checked)

        Returns:
            The persisted product composed with its progenitor, plus the
            created attributes with their values

        Raises:
            InvalidInputError: If a unique index rejects the SKU or an attribute value
            InternalError: If any other step fails; the transaction is rolled back
        """
        state = PipelineState.STARTED

        async with self._session_factory() as session:
            await self._begin(session, sku=data.sku)
            try:
                progenitor = new_progenitor_from_input(data)
                progenitor.id = await insert_record(session, PROGENITOR_LAYOUT, progenitor)
                state = PipelineState.PROGENITOR_CREATED

                attributes = []
                for group in data.attributes_and_values:
                    attributes.append(
                        await insert_attribute_with_values(session, group, progenitor.id)
                    )
                state = PipelineState.ATTRIBUTES_CREATED

                product = new_product_from_input(progenitor, data)
                product.id = await insert_record(session, PRODUCT_LAYOUT, product)
                state = PipelineState.PRODUCT_CREATED

                await session.commit()
                state = PipelineState.COMMITTED

            except SQLAlchemyError as e:
                duplicate = (
                    f"product with sku `{data.sku}` already exists"
                    if state is PipelineState.ATTRIBUTES_CREATED
                    else DUPLICATE_VALUE_MESSAGE
                )
                await self._abort(
                    session, state, FAILED_ACTIONS[state], e, duplicate, sku=data.sku
                )

        logger.info(
            "Product created",
            sku=product.sku,
            product_id=product.id,
            progenitor_id=progenitor.id,
            attributes=len(attributes),
        )
        return CreatedProduct(product=product, attributes=attributes)

    async def create_attributes(
        self,
        progenitor_id: int,
        groups: Sequence["AttributeCreationInput"],
    ) -> list[ProductAttribute]:
        """Create attributes and their values for an existing progenitor."""
        state = PipelineState.PROGENITOR_CREATED

        async with self._session_factory() as session:
            await self._begin(session, progenitor_id=progenitor_id)
            try:
                attributes = [
                    await insert_attribute_with_values(session, group, progenitor_id)
                    for group in groups
                ]
                state = PipelineState.ATTRIBUTES_CREATED

                await session.commit()
                state = PipelineState.COMMITTED

            except SQLAlchemyError as e:
                action = (
                    COMMIT_ACTION
                    if state is PipelineState.ATTRIBUTES_CREATED
                    else FAILED_ACTIONS[state]
                )
                await self._abort(
                    session, state, action, e, DUPLICATE_VALUE_MESSAGE, progenitor_id=progenitor_id
                )

        logger.info("Attributes created", progenitor_id=progenitor_id, attributes=len(attributes))
        return attributes

    async def _begin(self, session: AsyncSession, **context: Any) -> None:
        try:
            await session.begin()
        except SQLAlchemyError as e:
            logger.error("Could not open transaction", error=str(e), **context)
            raise InternalError(BEGIN_ACTION, e) from e

    async def _abort(
        self,
        session: AsyncSession,
        state: PipelineState,
        action: str,
        cause: SQLAlchemyError,
        duplicate_message: str,
        **context: Any,
    ) -> None:
        """Roll back, then raise ``InvalidInputError`` for a unique index hit
        and ``InternalError`` for anything else."""
        try:
            await session.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error("Rollback failed", error=str(rollback_error), **context)

        if isinstance(cause, IntegrityError) and is_unique_violation(cause):
            logger.info(
                "Creation pipeline rejected duplicate",
                step=state.value,
                final_state=PipelineState.ROLLED_BACK.value,
                error=str(cause.orig),
                **context,
            )
            raise InvalidInputError(duplicate_message) from cause

        logger.error(
            "Creation pipeline failed",
            step=state.value,
            action=action,
            final_state=PipelineState.ROLLED_BACK.value,
            error=str(cause),
            **context,
        )
        raise InternalError(action, cause) from cause
