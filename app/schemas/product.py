"""
Product Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: int = 0
    cost_price: Optional[float] = Field(None, alias="costPrice")
    sales_price: Optional[float] = Field(None, alias="salesPrice")
    supplier: Optional[str] = None
    supplier_contact: Optional[str] = Field(None, alias="supplierContact")

    class Config:
        populate_by_name = True
