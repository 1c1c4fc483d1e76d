"""Generic "does an unarchived row exist" check shared by every resource."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.core.errors import DatabaseError
from dairycart.core.query_builder import build_multi_column_existence_query
from dairycart.infra.logging import get_logger

logger = get_logger(__name__)


class ExistenceGate:
    """Answers existence questions for registered tables.

    Archived rows never count as existing. A query that yields no row at
    all is reported as ``False``; any other driver failure is raised as
    ``DatabaseError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, table: str, column: str, value: Any) -> bool:
        """Check for an unarchived row where ``column = value``.

        Args:
            table: Registered table name (e.g. "products")
            column: Column of that table (e.g. "sku")
            value: Value to look for

        Returns:
            True if such a row exists
        """
        return await self.exists_where(table, {column: value})

    async def exists_where(self, table: str, criteria: Mapping[str, Any]) -> bool:
        """Check for an unarchived row matching every ``column = value`` pair."""
        columns = list(criteria)
        sql = build_multi_column_existence_query(table, columns)
        params = {f"p{position}": criteria[name] for position, name in enumerate(columns, start=1)}

        try:
            result = await self._session.execute(text(sql), params)
            exists = bool(result.scalar_one())
        except NoResultFound:
            return False
        except SQLAlchemyError as e:
            logger.error(
                "Existence check failed",
                table=table,
                columns=columns,
                error=str(e),
            )
            raise DatabaseError(f"existence check on {table} failed") from e

        logger.debug("Existence check", table=table, columns=columns, exists=exists)
        return exists
