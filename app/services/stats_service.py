"""
Statistics Service - Cross-entity aggregates over records, products and customers
"""
from enum import Enum
from typing import Dict, List

from app.schemas.stock import RecordType
from app.stores import Aggregation, DocumentStore, EntityKind

OUTGOING = {"type": RecordType.OUTGOING.value}


class SpendStrategy(str, Enum):
    """
    How a customer's spend is totalled from outgoing records.

    UNIT_COST treats a record's cost as a unit price (quantity * cost);
    RAW_COST takes the cost field as the movement total.
    """
    UNIT_COST = "unit_cost"
    RAW_COST = "raw_cost"

    @property
    def sum_of(self) -> tuple:
        if self is SpendStrategy.UNIT_COST:
            return ("quantity", "cost")
        return ("cost",)

    def spend(self, record: dict):
        cost = record.get("cost") or 0
        if self is SpendStrategy.UNIT_COST:
            return cost * (record.get("quantity") or 0)
        return cost


class StatsService:
    """Aggregates over records joined softly to products and customers"""
    
    @staticmethod
    def best_selling_products(store: DocumentStore, limit: int = 5, with_details: bool = False) -> List[dict]:
        """
        Outgoing quantity per product name, highest first (ties by name).
        The detailed variant drops names that no longer resolve to a product.
        """
        rows = store.aggregate(
            EntityKind.RECORD,
            Aggregation(group_by="name", match=OUTGOING, sum_of=("quantity",), limit=limit)
        )
        
        if not with_details:
            return [{"name": row["key"], "totalSold": row["total"]} for row in rows]
        
        results = []
        for row in rows:
            product = store.find_one(EntityKind.PRODUCT, {"name": row["key"]})
            if product:
                results.append({"name": row["key"], "totalSold": row["total"], "product": product})
        return results
    
    @staticmethod
    def top_customers(
        store: DocumentStore,
        limit: int = 5,
        strategy: SpendStrategy = SpendStrategy.UNIT_COST
    ) -> List[dict]:
        """Outgoing spend grouped by the record's supplier field, joined to customers by name"""
        rows = store.aggregate(
            EntityKind.RECORD,
            Aggregation(group_by="supplier", match=OUTGOING, sum_of=strategy.sum_of, limit=limit)
        )
        
        return [
            {
                "name": row["key"],
                "totalSpent": row["total"],
                "customer": store.find_one(EntityKind.CUSTOMER, {"name": row["key"]}),
            }
            for row in rows
        ]
    
    @staticmethod
    def per_customer_stats(store: DocumentStore, strategy: SpendStrategy = SpendStrategy.RAW_COST) -> List[dict]:
        """Purchases and spend per customer, from outgoing records carrying its id"""
        products = {}
        for product in store.list_all(EntityKind.PRODUCT):
            products.setdefault(product["name"], product)
        
        by_customer: Dict[str, List[dict]] = {}
        for record in store.list_all(EntityKind.RECORD, OUTGOING):
            if record.get("customerId"):
                by_customer.setdefault(record["customerId"], []).append(record)
        
        results = []
        for customer in store.list_all(EntityKind.CUSTOMER):
            selected = by_customer.get(customer["id"], [])
            purchases = []
            for record in selected:
                cost = record.get("cost") or 0
                quantity = record.get("quantity") or 0
                purchases.append({
                    "name": record.get("name"),
                    "quantity": quantity,
                    "cost": cost,
                    "totalCost": cost * quantity,
                    "supplier": record.get("supplier"),
                    "productDetails": products.get(record.get("name"), {}),
                })
            
            results.append({
                **customer,
                "totalSpent": sum(strategy.spend(r) for r in selected),
                "totalRecords": len(selected),
                "purchases": purchases,
            })
        return results
    
    @staticmethod
    def dashboard_stats(store: DocumentStore) -> dict:
        return {
            "totalProducts": store.count(EntityKind.PRODUCT),
            "totalRecords": store.count(EntityKind.RECORD),
            "totalCustomers": store.count(EntityKind.CUSTOMER),
        }
    
    @staticmethod
    def type_stats(store: DocumentStore) -> Dict[str, int]:
        """Number of records per movement type"""
        rows = store.aggregate(EntityKind.RECORD, Aggregation(group_by="type"))
        return {row["key"]: row["total"] for row in rows}
