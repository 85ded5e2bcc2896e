"""
Ledger Service - Products, relative quantity changes and stock history
"""
import logging
from typing import Any, Dict, List

from app.core.exceptions import InvalidInputError, NotFound, ValidationError
from app.schemas.product import ProductCreate
from app.schemas.stock import RecordType
from app.stores import DocumentStore, EntityKind
from .payload import parse_payload

logger = logging.getLogger(__name__)


def _date_key(record: dict) -> str:
    return record.get("date") or ""


class LedgerService:
    """Product stock business logic"""
    
    @staticmethod
    def list_products(store: DocumentStore) -> List[dict]:
        return store.list_all(EntityKind.PRODUCT)
    
    @staticmethod
    def get_product(store: DocumentStore, name: str) -> dict:
        product = store.find_one(EntityKind.PRODUCT, {"name": name})
        if not product:
            raise NotFound("Product not found")
        return product
    
    @staticmethod
    def create_product(store: DocumentStore, data: Dict[str, Any]) -> dict:
        """Create a product; names are unique"""
        product_data = parse_payload(ProductCreate, data)
        
        if store.find_one(EntityKind.PRODUCT, {"name": product_data.name}):
            raise ValidationError("Product already exists")
        
        product = store.insert(EntityKind.PRODUCT, product_data.model_dump(by_alias=True))
        logger.info(f"Created product {product['name']} (qty {product['quantity']})")
        return product
    
    @staticmethod
    def delete_product(store: DocumentStore, name: str) -> dict:
        """Delete a product by name. Its records are left in place."""
        product = LedgerService.get_product(store, name)
        store.delete_one(EntityKind.PRODUCT, {"id": product["id"]})
        logger.info(f"Deleted product {name}")
        return product
    
    @staticmethod
    def apply_quantity_change(store: DocumentStore, name: str, delta: Any) -> dict:
        """
        Adjust stock by a signed delta. Quantity is never set absolutely so
        that concurrent restocks and sales compose additively.
        """
        if isinstance(delta, bool) or not isinstance(delta, (int, float)):
            raise InvalidInputError("quantityChange must be a number")
        if isinstance(delta, float):
            if not delta.is_integer():
                raise InvalidInputError("quantityChange must be a whole number")
            delta = int(delta)
        
        product = store.update_one(EntityKind.PRODUCT, {"name": name}, inc_fields={"quantity": delta})
        if not product:
            raise NotFound("Product not found")
        
        logger.info(f"Quantity change {delta:+d} on {name} -> {product['quantity']}")
        return product
    
    @staticmethod
    def import_products(store: DocumentStore, data: Any) -> Dict[str, int]:
        """
        Bulk import. New names are inserted; existing products get the
        supplied fields overwritten and the imported quantity added.
        """
        items = data.get("products") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ValidationError("Expected a list of products")
        
        # Validate everything before writing anything
        parsed = [parse_payload(ProductCreate, item) for item in items]
        
        created = updated = 0
        for product_data in parsed:
            doc = product_data.model_dump(by_alias=True)
            existing = store.find_one(EntityKind.PRODUCT, {"name": product_data.name})
            if existing is None:
                store.insert(EntityKind.PRODUCT, doc)
                created += 1
                continue
            
            supplied = product_data.model_dump(by_alias=True, exclude_unset=True)
            fields = {k: v for k, v in supplied.items() if k not in ("name", "quantity")}
            store.update_one(
                EntityKind.PRODUCT,
                {"id": existing["id"]},
                set_fields=fields,
                inc_fields={"quantity": product_data.quantity},
            )
            updated += 1
        
        logger.info(f"Imported products: {created} created, {updated} updated")
        return {"created": created, "updated": updated}
    
    @staticmethod
    def compute_stock_history(records: List[dict]) -> List[dict]:
        """
        Running stock total over a product's records ordered by date.

        Incoming records add their quantity and outgoing records subtract it.
        Records sharing a date keep their original order.
        """
        movement_types = {RecordType.INCOMING.value, RecordType.OUTGOING.value}
        # sorted() is stable, so records sharing a date keep insertion order
        merged = sorted((r for r in records if r.get("type") in movement_types), key=_date_key)
        
        total = 0
        history = []
        for record in merged:
            quantity = record.get("quantity") or 0
            if record["type"] == RecordType.INCOMING.value:
                total += quantity
            else:
                total -= quantity
            history.append({
                "date": record.get("date"),
                "type": record["type"],
                "quantity": quantity,
                "total": total,
            })
        return history
    
    @staticmethod
    def product_stock_history(store: DocumentStore, name: str) -> List[dict]:
        records = store.list_all(EntityKind.RECORD, {"name": name})
        return LedgerService.compute_stock_history(records)
    
    @staticmethod
    def compute_restock_frequency(incoming_history: List[dict], current_quantity: int) -> List[dict]:
        """
        Amount added per restock relative to the previous restock's quantity.
        The product's current quantity is the baseline for the first entry.
        """
        frequency = []
        baseline = current_quantity or 0
        cumulative = 0
        for record in incoming_history:
            quantity = record.get("quantity") or 0
            added = quantity - baseline
            cumulative += added
            frequency.append({"date": record.get("date"), "added": added, "cumulative": cumulative})
            baseline = quantity
        return frequency
    
    @staticmethod
    def restock_frequency(store: DocumentStore, name: str) -> dict:
        product = LedgerService.get_product(store, name)
        incoming = store.list_all(EntityKind.RECORD, {"name": name, "type": RecordType.INCOMING.value})
        incoming.sort(key=_date_key)
        
        history = LedgerService.compute_restock_frequency(incoming, product.get("quantity"))
        return {"name": name, "frequency": len(history), "history": history}
