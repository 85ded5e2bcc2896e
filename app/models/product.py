"""
Product Models
"""
from sqlalchemy import Column, String, Numeric, Integer
from app.core import Base
from .base import DocumentMixin

class Product(Base, DocumentMixin):
    """Product Master"""
    __tablename__ = "product"
    
    DOC_FIELDS = {
        "name": "name",
        "quantity": "quantity",
        "costPrice": "cost_price",
        "salesPrice": "sales_price",
        "supplier": "supplier",
        "supplierContact": "supplier_contact",
    }
    
    name = Column(String(300), unique=True, nullable=False, index=True)
    quantity = Column(Integer, default=0, nullable=False)
    cost_price = Column(Numeric(12, 2))
    sales_price = Column(Numeric(12, 2))
    supplier = Column(String(200))
    supplier_contact = Column(String(200))
