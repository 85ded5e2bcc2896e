"""
Stock Record Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date as date_type
from enum import Enum

class RecordType(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"

class RecordCreate(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: int
    date: Optional[date_type] = None
    cost: float = 0
    supplier: Optional[str] = None
    customer_id: Optional[str] = Field(None, alias="customerId")

    class Config:
        populate_by_name = True

class RecordUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = None
    date: Optional[date_type] = None
    cost: Optional[float] = None
    supplier: Optional[str] = None
    customer_id: Optional[str] = Field(None, alias="customerId")

    @field_validator("name", "quantity")
    @classmethod
    def not_null(cls, value):
        # May be omitted, but an explicit null cannot clear a required field
        if value is None:
            raise ValueError("must not be null")
        return value

    class Config:
        populate_by_name = True
