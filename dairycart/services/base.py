"""Shared data-access helpers used by every resource service.

Driver failures are logged here and re-raised as ``DatabaseError``; a write
rejected by a unique index is an ``InvalidInputError`` instead. Rows are
mapped through their layout, so a shape mismatch surfaces as
``MappingError``. Every write helper commits before it returns.
"""

from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.core.errors import DatabaseError, InvalidInputError, NotFoundError
from dairycart.core.existence import ExistenceGate
from dairycart.core.filters import QueryFilter
from dairycart.core.query_builder import (
    Query,
    build_archive_query,
    build_dynamic_update_query,
    build_filtered_list_query,
    build_insert_query,
    build_retrieval_query,
)
from dairycart.core.row_mapper import EntityLayout, Layout, map_counted_rows, map_rows
from dairycart.infra.database import execute_query, is_unique_violation
from dairycart.infra.logging import get_logger

logger = get_logger(__name__)


def _duplicate_error(error: IntegrityError, action: str, entity: str | None) -> InvalidInputError:
    logger.info("Unique index rejected write", action=action, error=str(error.orig))
    return InvalidInputError(f"{entity or 'row'} already exists")


async def run_query(
    session: AsyncSession,
    query: Query,
    action: str,
    entity: str | None = None,
) -> Result:
    """Execute ``query``, translating driver errors.

    Args:
        session: Active database session
        query: Builder-produced query
        action: What the query does, for logs (e.g. "retrieve product")
        entity: Entity named in the error when a unique index rejects the write

    Raises:
        InvalidInputError: If a unique index rejects the write
        DatabaseError: If the driver reports any other failure
    """
    try:
        return await execute_query(session, query)
    except IntegrityError as e:
        if is_unique_violation(e):
            raise _duplicate_error(e, action, entity) from e
        logger.error("Query failed", action=action, error=str(e))
        raise DatabaseError(action) from e
    except SQLAlchemyError as e:
        logger.error("Query failed", action=action, error=str(e))
        raise DatabaseError(action) from e


async def commit_changes(session: AsyncSession, action: str, entity: str | None = None) -> None:
    """Commit the request session so the write is durable before the response.

    Raises:
        InvalidInputError: If a unique index rejects the commit
        DatabaseError: If the commit fails for any other reason
    """
    try:
        await session.commit()
    except IntegrityError as e:
        if is_unique_violation(e):
            raise _duplicate_error(e, action, entity) from e
        logger.error("Commit failed", action=action, error=str(e))
        raise DatabaseError(action) from e
    except SQLAlchemyError as e:
        logger.error("Commit failed", action=action, error=str(e))
        raise DatabaseError(action) from e


async def ensure_exists(session: AsyncSession, layout: EntityLayout, column: str, value: Any) -> None:
    """Raise ``NotFoundError`` unless an unarchived row matches."""
    if not await ExistenceGate(session).exists(layout.table, column, value):
        raise NotFoundError(layout.entity, value)


async def retrieve_one(session: AsyncSession, layout: Layout, column: str, value: Any) -> Any:
    """Fetch exactly one unarchived row or raise ``NotFoundError``."""
    result = await run_query(
        session, build_retrieval_query(layout, column, value), f"retrieve {layout.entity}"
    )
    row = result.fetchone()
    if row is None:
        raise NotFoundError(layout.entity, value)
    return layout.map_row(row)


async def retrieve_many(session: AsyncSession, layout: Layout, column: str, value: Any) -> list[Any]:
    result = await run_query(
        session, build_retrieval_query(layout, column, value), f"retrieve {layout.entity} rows"
    )
    return map_rows(layout, result.all())


async def list_page(
    session: AsyncSession,
    layout: Layout,
    query_filter: QueryFilter,
    conditions: dict[str, Any] | None = None,
) -> tuple[int, list[Any]]:
    """Fetch one filtered page.

    Returns:
        Tuple of (total matching rows, records on this page)
    """
    query = build_filtered_list_query(layout, query_filter, conditions)
    result = await run_query(session, query, f"list {layout.entity} rows")
    return map_counted_rows(layout, result.all())


async def insert_one(session: AsyncSession, layout: EntityLayout, record: Any) -> int:
    """Insert and commit ``record``, returning its new id."""
    action = f"create {layout.entity}"
    result = await run_query(session, build_insert_query(layout, record), action, layout.entity)
    new_id = int(result.scalar_one())
    await commit_changes(session, action, layout.entity)
    return new_id


async def update_one(session: AsyncSession, layout: EntityLayout, original: Any, updated: Any) -> Any:
    """Write the differences between two records.

    Returns:
        The row as stored after the update, or ``updated`` unchanged when
        there was nothing to write
    """
    query = build_dynamic_update_query(layout, original, updated)
    if query is None:
        logger.debug("Nothing to update", entity=layout.entity, id=original.id)
        return updated

    action = f"update {layout.entity}"
    result = await run_query(session, query, action, layout.entity)
    row = result.fetchone()
    if row is None:
        raise NotFoundError(layout.entity, original.id)
    stored = layout.map_row(row)
    await commit_changes(session, action, layout.entity)
    return stored


async def archive_one(session: AsyncSession, layout: EntityLayout, column: str, value: Any) -> None:
    """Soft-delete the matching row or raise ``NotFoundError``."""
    action = f"archive {layout.entity}"
    await ensure_exists(session, layout, column, value)
    await run_query(session, build_archive_query(layout, column, value), action)
    await commit_changes(session, action)
    logger.info("Row archived", entity=layout.entity, column=column, value=value)
