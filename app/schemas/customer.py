"""
Customer Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional

class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    business: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    contact: Optional[str] = None

# Updates replace all four attributes
CustomerUpdate = CustomerCreate

class CustomerFilter(BaseModel):
    name: Optional[str] = None
    business: Optional[str] = None
    location: Optional[str] = None
    contact: Optional[str] = None
