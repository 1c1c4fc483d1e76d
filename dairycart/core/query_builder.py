"""Pure SQL builders.

Every builder returns a ``Query``: SQL text plus a positional argument list.
Arguments are bound as ``:p1 … :pN``; table and column names only ever come
from registered layouts, never from request data. Nothing here touches the
database.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from dairycart.core.filters import QueryFilter
from dairycart.core.layouts import get_layout
from dairycart.core.row_mapper import EntityLayout, JoinedLayout, Layout

TOTAL_COUNT_COLUMN = "total_count"


@dataclass(frozen=True)
class Query:
    """Parameterized SQL statement."""

    sql: str
    args: tuple[Any, ...] = ()

    def params(self) -> dict[str, Any]:
        """Named bind parameters for ``sqlalchemy.text``."""
        return {f"p{position}": value for position, value in enumerate(self.args, start=1)}


class _Binder:
    """Collects positional arguments and hands out their placeholders."""

    def __init__(self) -> None:
        self.args: list[Any] = []

    def bind(self, value: Any) -> str:
        self.args.append(value)
        return f":p{len(self.args)}"

    def query(self, sql: str) -> Query:
        return Query(sql=sql, args=tuple(self.args))


def _primary(layout: Layout) -> EntityLayout:
    return layout.primary if isinstance(layout, JoinedLayout) else layout


def build_existence_query(table: str, column: str) -> str:
    """SQL for "an unarchived row with ``column = :p1`` exists"."""
    return build_multi_column_existence_query(table, [column])


def build_multi_column_existence_query(table: str, columns: Sequence[str]) -> str:
    layout = get_layout(table)
    if not columns:
        raise ValueError("existence query needs at least one column")
    predicates = [
        f"{layout.column(name).name} = :p{position}"
        for position, name in enumerate(columns, start=1)
    ]
    predicates.append("archived_on IS NULL")
    return f"SELECT EXISTS(SELECT 1 FROM {layout.table} WHERE {' AND '.join(predicates)})"


def build_retrieval_query(layout: Layout, column: str, value: Any) -> Query:
    """Select one unarchived row (joined rows included) by ``column``."""
    primary = _primary(layout)
    primary.column(column)
    binder = _Binder()
    sql = (
        f"SELECT {layout.select_list()} FROM {layout.from_clause()} "
        f"WHERE {primary.alias}.{column} = {binder.bind(value)} "
        f"AND {primary.alias}.archived_on IS NULL"
    )
    return binder.query(sql)


def build_filtered_list_query(
    layout: Layout,
    query_filter: QueryFilter,
    conditions: Mapping[str, Any] | None = None,
) -> Query:
    """Select one page of unarchived rows plus the total match count.

    The first selected column is ``total_count``, computed with a window
    function so callers get pagination metadata without a second query.

    Args:
        layout: Layout of the rows to list
        query_filter: Page, limit and time-range bounds
        conditions: Extra ``column = value`` equality predicates

    Returns:
        Query whose rows are ``(total_count, *layout columns)``
    """
    primary = _primary(layout)
    alias = primary.alias
    binder = _Binder()

    predicates = [f"{alias}.archived_on IS NULL"]
    for column, value in (conditions or {}).items():
        primary.column(column)
        predicates.append(f"{alias}.{column} = {binder.bind(value)}")

    time_bounds = (
        ("created_on", ">", query_filter.created_after),
        ("created_on", "<", query_filter.created_before),
        ("updated_on", ">", query_filter.updated_after),
        ("updated_on", "<", query_filter.updated_before),
    )
    for column, operator, bound in time_bounds:
        if bound is not None:
            predicates.append(f"{alias}.{column} {operator} {binder.bind(bound)}")

    limit = binder.bind(query_filter.limit)
    offset = binder.bind(query_filter.offset)
    sql = (
        f"SELECT count(*) OVER () AS {TOTAL_COUNT_COLUMN}, {layout.select_list()} "
        f"FROM {layout.from_clause()} "
        f"WHERE {' AND '.join(predicates)} "
        f"ORDER BY {alias}.id "
        f"LIMIT {limit} OFFSET {offset}"
    )
    return binder.query(sql)


def build_dynamic_update_query(layout: EntityLayout, original: Any, updated: Any) -> Query | None:
    """UPDATE only the writable columns that differ between two records.

    Returns:
        Query returning the updated row in layout order, or ``None`` when
        nothing changed and no statement needs to run
    """
    if original.id is None:
        raise ValueError(f"cannot update a {layout.entity} without an id")

    changed = [
        column
        for column in layout.writable
        if getattr(original, column.attribute) != getattr(updated, column.attribute)
    ]
    if not changed:
        return None

    binder = _Binder()
    assignments = [f"{c.name} = {binder.bind(getattr(updated, c.attribute))}" for c in changed]
    assignments.append("updated_on = NOW()")
    sql = (
        f"UPDATE {layout.table} SET {', '.join(assignments)} "
        f"WHERE id = {binder.bind(original.id)} AND archived_on IS NULL "
        f"RETURNING {', '.join(layout.column_names)}"
    )
    return binder.query(sql)


def build_insert_query(layout: EntityLayout, record: Any) -> Query:
    """INSERT every writable column, returning the generated id."""
    binder = _Binder()
    columns = layout.writable
    placeholders = [binder.bind(value) for value in layout.values_for(record, columns)]
    sql = (
        f"INSERT INTO {layout.table} ({', '.join(c.name for c in columns)}) "
        f"VALUES ({', '.join(placeholders)}) RETURNING id"
    )
    return binder.query(sql)


def build_archive_query(layout: EntityLayout, column: str, value: Any) -> Query:
    """Soft-delete: stamp ``archived_on`` on the matching unarchived row."""
    layout.column(column)
    binder = _Binder()
    sql = (
        f"UPDATE {layout.table} SET archived_on = NOW() "
        f"WHERE {column} = {binder.bind(value)} AND archived_on IS NULL"
    )
    return binder.query(sql)
