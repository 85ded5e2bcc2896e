from .base import DocumentMixin, new_id
from .product import Product
from .stock import StockRecord
from .customer import Customer

__all__ = [
    # Base
    "DocumentMixin", "new_id",
    # Product
    "Product",
    # Stock
    "StockRecord",
    # Customer
    "Customer",
]
