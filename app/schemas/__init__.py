# Pydantic Schemas Package
from .product import ProductCreate
from .stock import RecordType, RecordCreate, RecordUpdate
from .customer import CustomerCreate, CustomerUpdate, CustomerFilter

__all__ = [
    "ProductCreate",
    "RecordType", "RecordCreate", "RecordUpdate",
    "CustomerCreate", "CustomerUpdate", "CustomerFilter",
]
