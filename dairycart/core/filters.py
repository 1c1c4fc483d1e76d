"""Filter/pagination parsing for list endpoints.

Parsing fails open: a parameter that cannot be parsed is dropped and the
field keeps its default, so a malformed query string never turns into a
client error here.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from dairycart.config import settings
from dairycart.infra.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE = 1

# Largest OFFSET PostgreSQL accepts (bigint)
MAX_OFFSET = 2**63 - 1

_TIME_PARAMS = ("created_after", "created_before", "updated_after", "updated_before")


@dataclass(frozen=True)
class QueryFilter:
    """Bounded, defaulted list filter.

    Attributes:
        page: 1-based page number
        limit: Page size, never above the configured maximum
        created_after: Only rows created strictly after this instant
        created_before: Only rows created strictly before this instant
        updated_after: Only rows updated strictly after this instant
        updated_before: Only rows updated strictly before this instant
    """

    page: int = DEFAULT_PAGE
    limit: int = settings.default_page_limit
    created_after: datetime | None = None
    created_before: datetime | None = None
    updated_after: datetime | None = None
    updated_before: datetime | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_positive_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 1 else None


def _parse_unix_time(raw: str | None) -> datetime | None:
    if raw is None:
        return None
    try:
        return datetime.fromtimestamp(int(raw.strip()), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def parse_raw_filter_params(
    params: Mapping[str, str],
    default_limit: int | None = None,
    max_limit: int | None = None,
) -> QueryFilter:
    """Parse raw query parameters into a ``QueryFilter``.

    Args:
        params: Query parameters (e.g. ``request.query_params``)
        default_limit: Page size when none is given (defaults to settings)
        max_limit: Upper bound for the page size (defaults to settings)

    Returns:
        QueryFilter with every unparsable field left at its default
    """
    default_limit = default_limit or settings.default_page_limit
    max_limit = max_limit or settings.max_page_limit
    dropped: list[str] = []

    page = _parse_positive_int(params.get("page"))
    if page is None:
        if "page" in params:
            dropped.append("page")
        page = DEFAULT_PAGE

    limit = _parse_positive_int(params.get("limit"))
    if limit is None:
        if "limit" in params:
            dropped.append("limit")
        limit = default_limit
    limit = min(limit, max_limit)

    if (page - 1) * limit > MAX_OFFSET:
        dropped.append("page")
        page = DEFAULT_PAGE

    times: dict[str, datetime | None] = {}
    for param in _TIME_PARAMS:
        times[param] = _parse_unix_time(params.get(param))
        if times[param] is None and param in params:
            dropped.append(param)

    if dropped:
        logger.debug("Dropped unparsable filter params", params=dropped)

    return QueryFilter(page=page, limit=limit, **times)
