"""Core module - Query building, row mapping, merging and the creation pipeline."""

from dairycart.core.creation_pipeline import CreationPipeline, PipelineState
from dairycart.core.errors import (
    DairycartError,
    DatabaseError,
    InternalError,
    InvalidInputError,
    MappingError,
    NotFoundError,
)
from dairycart.core.existence import ExistenceGate
from dairycart.core.filters import QueryFilter, parse_raw_filter_params
from dairycart.core.merge import ensure_not_empty, merge, round_to_precision
from dairycart.core.validation import SkuValidator

__all__ = [
    "CreationPipeline",
    "PipelineState",
    "DairycartError",
    "DatabaseError",
    "InternalError",
    "InvalidInputError",
    "MappingError",
    "NotFoundError",
    "ExistenceGate",
    "QueryFilter",
    "parse_raw_filter_params",
    "ensure_not_empty",
    "merge",
    "round_to_precision",
    "SkuValidator",
]
