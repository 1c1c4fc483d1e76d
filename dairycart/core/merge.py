"""Merge engine for partial updates.

An update input is overlaid onto an existing record field by field. A field
left at its zero value ("", 0, False, None) counts as omitted and the
existing value is kept. This means a caller cannot set a field *to* zero
through a partial update; that limitation is known and deliberate.

Float fields are rounded to a fixed number of decimal places before they are
written so repeated partial updates do not accumulate float drift.
"""

import dataclasses
import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, TypeVar

from pydantic import BaseModel

from dairycart.config import settings
from dairycart.core.errors import InvalidInputError

RecordT = TypeVar("RecordT")


def round_to_precision(value: float, places: int) -> float:
    """Round ``value`` to ``places`` decimal places.

    Rounds the shortest decimal representation of the float (its ``repr``)
    to the nearest value; exact halves go away from zero. So
    ``round_to_precision(1.23456789, 2) == 1.23``,
    ``round_to_precision(1.23456789, 3) == 1.235`` and
    ``round_to_precision(0.125, 2) == 0.13``.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _is_zero(value: Any) -> bool:
    return not value


def update_fields(update: Any) -> dict[str, Any]:
    """Field name → value for a pydantic model, dataclass or mapping."""
    if isinstance(update, BaseModel):
        return {name: getattr(update, name) for name in type(update).model_fields}
    if dataclasses.is_dataclass(update) and not isinstance(update, type):
        return {f.name: getattr(update, f.name) for f in dataclasses.fields(update)}
    if isinstance(update, Mapping):
        return dict(update)
    raise TypeError(f"cannot read update fields from {type(update).__name__}")


def is_empty_update(update: Any) -> bool:
    return all(_is_zero(value) for value in update_fields(update).values())


def ensure_not_empty(update: Any, entity: str) -> None:
    """Reject an update whose every field decoded to its zero value.

    Raises:
        InvalidInputError: If the update carries no data at all
    """
    if is_empty_update(update):
        raise InvalidInputError(f"Invalid input provided for {entity} body")


def merge(update: Any, existing: RecordT, precision: int | None = None) -> RecordT:
    """Overlay the non-zero fields of ``update`` onto a copy of ``existing``.

    Args:
        update: Partial update (pydantic model, dataclass or mapping)
        existing: Record to merge onto; it is not modified
        precision: Decimal places for float fields (defaults to settings)

    Returns:
        New record with the update applied
    """
    places = settings.numeric_precision if precision is None else precision
    known = {f.name for f in dataclasses.fields(existing)}  # type: ignore[arg-type]

    changes: dict[str, Any] = {}
    for name, value in update_fields(update).items():
        if _is_zero(value):
            continue
        if name not in known:
            raise ValueError(f"{type(existing).__name__} has no field {name!r}")
        if isinstance(value, float):
            value = round_to_precision(value, places)
        changes[name] = value

    return dataclasses.replace(existing, **changes)  # type: ignore[type-var]
