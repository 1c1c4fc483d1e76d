"""Explicit ordinal mapping between result rows and typed records.

Every entity declares an ``EntityLayout``: the ordered list of columns its
queries select and the record attribute each column populates. Queries build
their column lists from the same layout, so the "which column lands in which
field" contract lives in one place and can be tested on its own.

A row that does not have exactly as many columns as its layout is a
programming error and raises ``MappingError`` instead of shifting fields.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from dairycart.core.errors import MappingError


@dataclass(frozen=True)
class ColumnDescriptor:
    """One column of an entity layout.

    Attributes:
        name: Column name in the table
        attribute: Record attribute the column maps to
        nullable: Whether NULL is a legal value (mapped to ``None``)
        generated: Filled in by the database (ids, housekeeping timestamps);
            never written by inserts or updates
        converter: Optional callable applied to non-NULL values (e.g. ``float``
            for NUMERIC columns the driver returns as ``Decimal``)
    """

    name: str
    attribute: str
    nullable: bool = False
    generated: bool = False
    converter: Callable[[Any], Any] | None = None


@dataclass(frozen=True)
class EntityLayout:
    """Ordered column layout for one table."""

    entity: str
    table: str
    alias: str
    record: type
    columns: tuple[ColumnDescriptor, ...]

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def writable(self) -> tuple[ColumnDescriptor, ...]:
        """Columns supplied by the application on insert/update."""
        return tuple(c for c in self.columns if not c.generated)

    def has_column(self, name: str) -> bool:
        return any(c.name == name for c in self.columns)

    def column(self, name: str) -> ColumnDescriptor:
        for descriptor in self.columns:
            if descriptor.name == name:
                return descriptor
        raise ValueError(f"{self.table} has no column named {name!r}")

    def select_list(self) -> str:
        return ", ".join(f"{self.alias}.{c.name}" for c in self.columns)

    def from_clause(self) -> str:
        return f"{self.table} {self.alias}"

    def values_for(self, record: Any, columns: Iterable[ColumnDescriptor]) -> list[Any]:
        return [getattr(record, c.attribute) for c in columns]

    def map_row(self, row: Sequence[Any]) -> Any:
        """Build a record from a row laid out exactly like ``columns``."""
        values = tuple(row)
        if len(values) != len(self.columns):
            raise MappingError(
                f"{self.table} row has {len(values)} columns, "
                f"layout expects {len(self.columns)}"
            )

        fields: dict[str, Any] = {}
        for descriptor, value in zip(self.columns, values):
            if value is None:
                if not descriptor.nullable:
                    raise MappingError(
                        f"{self.table}.{descriptor.name} is NULL but not nullable"
                    )
            elif descriptor.converter is not None:
                value = descriptor.converter(value)
            fields[descriptor.attribute] = value
        return self.record(**fields)


@dataclass(frozen=True)
class JoinedLayout:
    """Two layouts selected side by side through a foreign-key join.

    Column order is every ``primary`` column followed by every ``secondary``
    column. The secondary record is attached to the primary one as
    ``attach_as``.
    """

    primary: EntityLayout
    secondary: EntityLayout
    join_column: str
    attach_as: str

    def __len__(self) -> int:
        return len(self.primary) + len(self.secondary)

    @property
    def entity(self) -> str:
        return self.primary.entity

    @property
    def alias(self) -> str:
        return self.primary.alias

    def select_list(self) -> str:
        return f"{self.primary.select_list()}, {self.secondary.select_list()}"

    def from_clause(self) -> str:
        return (
            f"{self.primary.from_clause()} JOIN {self.secondary.from_clause()} "
            f"ON {self.primary.alias}.{self.join_column} = {self.secondary.alias}.id"
        )

    def map_row(self, row: Sequence[Any]) -> Any:
        values = tuple(row)
        if len(values) != len(self):
            raise MappingError(
                f"joined {self.primary.table}/{self.secondary.table} row has "
                f"{len(values)} columns, layout expects {len(self)}"
            )
        split = len(self.primary)
        record = self.primary.map_row(values[:split])
        setattr(record, self.attach_as, self.secondary.map_row(values[split:]))
        return record


Layout = EntityLayout | JoinedLayout


def map_rows(layout: Layout, rows: Iterable[Sequence[Any]]) -> list[Any]:
    return [layout.map_row(row) for row in rows]


def map_counted_rows(layout: Layout, rows: Iterable[Sequence[Any]]) -> tuple[int, list[Any]]:
    """Map rows whose first column is the ``total_count`` window value.

    Returns:
        Tuple of (total matching rows across all pages, records on this page)
    """
    total = 0
    records = []
    for row in rows:
        values = tuple(row)
        if not values:
            raise MappingError("counted row is empty")
        total = int(values[0])
        records.append(layout.map_row(values[1:]))
    return total, records
