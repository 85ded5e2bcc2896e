"""
Customer Service
"""
import logging
from typing import Any, Dict, List, Optional

from app.core.exceptions import NotFound
from app.schemas.customer import CustomerCreate, CustomerUpdate, CustomerFilter
from app.stores import DocumentStore, EntityKind
from .payload import parse_payload

logger = logging.getLogger(__name__)


class CustomerService:
    """Customer business logic"""
    
    @staticmethod
    def list_customers(store: DocumentStore, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """List customers, matching supplied fields exactly"""
        match = CustomerFilter(**(filters or {})).model_dump(exclude_none=True)
        return store.list_all(EntityKind.CUSTOMER, match)
    
    @staticmethod
    def get_customer(store: DocumentStore, customer_id: str) -> dict:
        customer = store.find_one(EntityKind.CUSTOMER, {"id": customer_id})
        if not customer:
            raise NotFound("Customer not found")
        return customer
    
    @staticmethod
    def create_customer(store: DocumentStore, data: Dict[str, Any]) -> dict:
        customer_data = parse_payload(CustomerCreate, data)
        customer = store.insert(EntityKind.CUSTOMER, customer_data.model_dump())
        logger.info(f"Created customer {customer['id']} ({customer['name']})")
        return customer
    
    @staticmethod
    def update_customer(store: DocumentStore, customer_id: str, data: Dict[str, Any]) -> dict:
        """Replace name, business, location and contact"""
        customer_data = parse_payload(CustomerUpdate, data)
        customer = store.update_one(EntityKind.CUSTOMER, {"id": customer_id}, set_fields=customer_data.model_dump())
        if not customer:
            raise NotFound("Customer not found")
        return customer
    
    @staticmethod
    def delete_customer(store: DocumentStore, customer_id: str) -> dict:
        customer = CustomerService.get_customer(store, customer_id)
        store.delete_one(EntityKind.CUSTOMER, {"id": customer_id})
        logger.info(f"Deleted customer {customer_id}")
        return customer
