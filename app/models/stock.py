"""
Stock Movement Models
"""
from sqlalchemy import Column, String, Integer, Numeric
from app.core import Base
from .base import DocumentMixin

class StockRecord(Base, DocumentMixin):
    """Stock Movement Record"""
    __tablename__ = "stock_record"
    
    DOC_FIELDS = {
        "type": "movement_type",
        "name": "name",
        "quantity": "quantity",
        "date": "date",
        "cost": "cost",
        "supplier": "supplier",
        "customerId": "customer_id",
    }
    
    movement_type = Column(String(20), nullable=False, index=True)  # incoming, outgoing
    # Soft references: product by name, customer by id
    name = Column(String(300), nullable=False, index=True)
    customer_id = Column(String(36), index=True)
    supplier = Column(String(200))
    
    quantity = Column(Integer, nullable=False)
    date = Column(String(10))  # YYYY-MM-DD
    cost = Column(Numeric(12, 2), default=0)
