"""Error taxonomy shared by the data-access layer and the HTTP handlers.

Handlers only ever answer with one of three kinds of failure:

- ``NotFoundError`` (404): the existence gate said no.
- ``InvalidInputError`` (400): the request body or parameters are unusable.
- ``InternalError`` (500): anything else; the cause is logged, never returned.

``DatabaseError`` and ``MappingError`` are raised below the handlers and are
always classified as internal failures.
"""

from fastapi import status


class DairycartError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "internal_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DairycartError):
    """Raised when the requested row does not exist or is archived."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"

    def __init__(self, entity: str, identifier: object) -> None:
        super().__init__(
            f"The {entity} you were looking for (identified by `{identifier}`) does not exist"
        )
        self.entity = entity
        self.identifier = identifier


class InvalidInputError(DairycartError):
    """Raised for undecodable, empty or constraint-violating input."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "invalid_input"


class InternalError(DairycartError):
    """Raised when an operation fails for reasons the caller cannot fix."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = "internal_error"
    public_message = "Unexpected internal error"

    def __init__(self, action: str, cause: BaseException | None = None) -> None:
        super().__init__(self.public_message)
        self.action = action
        self.cause = cause


class DatabaseError(Exception):
    """Raised when the database driver or connection fails."""


class MappingError(Exception):
    """Raised when a result row does not match its column layout."""
