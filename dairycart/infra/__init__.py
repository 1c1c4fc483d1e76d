"""Infrastructure - Database and logging."""

from dairycart.infra.database import (
    DatabaseSession,
    close_db_engine,
    execute_query,
    get_db_session,
)
from dairycart.infra.logging import get_logger, setup_logging

__all__ = [
    "DatabaseSession",
    "close_db_engine",
    "execute_query",
    "get_db_session",
    "get_logger",
    "setup_logging",
]
