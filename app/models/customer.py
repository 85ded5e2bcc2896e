"""
Customer Models
"""
from sqlalchemy import Column, String
from app.core import Base
from .base import DocumentMixin

class Customer(Base, DocumentMixin):
    """Customer Account"""
    __tablename__ = "customer"
    
    DOC_FIELDS = {
        "name": "name",
        "business": "business",
        "location": "location",
        "contact": "contact",
    }
    
    name = Column(String(200), nullable=False, index=True)
    business = Column(String(200), nullable=False)
    location = Column(String(300), nullable=False)
    contact = Column(String(100))
