"""Input validators built once at startup and injected where needed."""

import re

from dairycart.core.errors import InvalidInputError


class SkuValidator:
    """Checks SKUs against the configured pattern.

    A SKU that fails here could never be addressed by the
    ``/product/{sku}`` routes again, so it is rejected up front.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = re.compile(pattern)

    def is_valid(self, sku: str) -> bool:
        return self.pattern.fullmatch(sku) is not None

    def validate(self, sku: str) -> str:
        """Return ``sku`` unchanged or raise ``InvalidInputError``."""
        if not self.is_valid(sku):
            raise InvalidInputError("Invalid input provided for product SKU")
        return sku
