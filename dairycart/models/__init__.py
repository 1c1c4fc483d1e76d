"""SQLAlchemy table definitions.

The service reads and writes through raw SQL built from the column layouts
in ``dairycart.core.layouts``; these models define the schema those layouts
describe and are used to create it locally.
"""

from dairycart.models.attribute import ProductAttribute, ProductAttributeValue
from dairycart.models.base import Base, TimestampMixin
from dairycart.models.discount import Discount
from dairycart.models.product import Product
from dairycart.models.progenitor import ProductProgenitor
from dairycart.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "Discount",
    "Product",
    "ProductAttribute",
    "ProductAttributeValue",
    "ProductProgenitor",
    "User",
]
