"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from typing import Any, Optional

from app.core import get_store
from app.services import LedgerService, RecordService, CustomerService, StatsService
from app.stores import DocumentStore

api_router = APIRouter(tags=["API"])

# ===================== DASHBOARD =====================

@api_router.get("/dashboard/stats")
def dashboard_stats(store: DocumentStore = Depends(get_store)):
    return StatsService.dashboard_stats(store)

# ===================== PRODUCTS =====================

@api_router.get("/products")
def list_products(store: DocumentStore = Depends(get_store)):
    return LedgerService.list_products(store)

@api_router.post("/products", status_code=201)
def create_product(data: dict, store: DocumentStore = Depends(get_store)):
    return LedgerService.create_product(store, data)

@api_router.post("/products/import")
def import_products(data: Any = Body(...), store: DocumentStore = Depends(get_store)):
    return LedgerService.import_products(store, data)

# Names may contain "/", so the name routes use the path converter.
# The history routes are registered first so their suffixes are not read as part of a name.

@api_router.get("/products/{name:path}/history")
def product_history(name: str, store: DocumentStore = Depends(get_store)):
    return LedgerService.product_stock_history(store, name)

@api_router.get("/products/{name:path}/restock-frequency")
def product_restock_frequency(name: str, store: DocumentStore = Depends(get_store)):
    return LedgerService.restock_frequency(store, name)

@api_router.get("/products/{name:path}")
def get_product(name: str, store: DocumentStore = Depends(get_store)):
    return LedgerService.get_product(store, name)

@api_router.put("/products/{name:path}")
def update_product_quantity(name: str, data: dict, store: DocumentStore = Depends(get_store)):
    return LedgerService.apply_quantity_change(store, name, data.get("quantityChange"))

@api_router.delete("/products/{name:path}")
def delete_product(name: str, store: DocumentStore = Depends(get_store)):
    product = LedgerService.delete_product(store, name)
    return {"message": "Product deleted", "product": product}

# ===================== RECORDS =====================

@api_router.get("/records")
def list_records(
    type: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store)
):
    return RecordService.list_records(store, type)

@api_router.get("/records/download")
def download_records(store: DocumentStore = Depends(get_store)):
    export = RecordService.export_records(store)
    return JSONResponse(
        content=export["content"],
        headers={"Content-Disposition": f'attachment; filename="{export["filename"]}"'}
    )

@api_router.post("/records/{record_type}", status_code=201)
def create_record(record_type: str, data: dict, store: DocumentStore = Depends(get_store)):
    return RecordService.create_record(store, record_type, data)

@api_router.get("/records/{record_id}")
def get_record(record_id: str, store: DocumentStore = Depends(get_store)):
    return RecordService.get_record(store, record_id)

@api_router.put("/records/{record_id}")
def update_record(record_id: str, data: dict, store: DocumentStore = Depends(get_store)):
    return RecordService.update_record(store, record_id, data)

@api_router.delete("/records/{record_id}")
def delete_record(record_id: str, store: DocumentStore = Depends(get_store)):
    record = RecordService.delete_record(store, record_id)
    return {"message": "Record deleted", "record": record}

# ===================== CUSTOMERS =====================

@api_router.get("/customers")
def list_customers(
    name: Optional[str] = Query(None),
    business: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    contact: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store)
):
    filters = {"name": name, "business": business, "location": location, "contact": contact}
    return CustomerService.list_customers(store, filters)

@api_router.post("/customers", status_code=201)
def create_customer(data: dict, store: DocumentStore = Depends(get_store)):
    return CustomerService.create_customer(store, data)

@api_router.get("/customers/{customer_id}")
def get_customer(customer_id: str, store: DocumentStore = Depends(get_store)):
    return CustomerService.get_customer(store, customer_id)

@api_router.put("/customers/{customer_id}")
def update_customer(customer_id: str, data: dict, store: DocumentStore = Depends(get_store)):
    return CustomerService.update_customer(store, customer_id, data)

@api_router.delete("/customers/{customer_id}")
def delete_customer(customer_id: str, store: DocumentStore = Depends(get_store)):
    customer = CustomerService.delete_customer(store, customer_id)
    return {"message": "Customer deleted", "customer": customer}
