"""
Document Store - persistence contract shared by the file and database backends
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class EntityKind(str, Enum):
    PRODUCT = "products"
    RECORD = "records"
    CUSTOMER = "customers"


@dataclass
class Aggregation:
    """
    Server-side group-and-total request.

    - sum_of=() counts documents per group
    - sum_of=("quantity",) sums one field
    - sum_of=("quantity", "cost") sums the product of the fields
    Groups whose key is null are skipped. Rows come back as
    {"key": ..., "total": ...} ordered by total descending, then key.
    """
    group_by: str
    match: Dict[str, Any] = field(default_factory=dict)
    sum_of: Tuple[str, ...] = ()
    limit: Optional[int] = None

    def value_of(self, doc: dict):
        if not self.sum_of:
            return 1
        value = 1
        for name in self.sum_of:
            value *= doc.get(name) or 0
        return value


def matches(doc: dict, match: Optional[Dict[str, Any]]) -> bool:
    """Exact field equality on every key of match"""
    if not match:
        return True
    return all(doc.get(key) == value for key, value in match.items())


def sort_groups(rows: List[dict], limit: Optional[int] = None) -> List[dict]:
    rows = sorted(rows, key=lambda r: (-r["total"], str(r["key"])))
    if limit is not None:
        rows = rows[:limit]
    return rows


class DocumentStore(ABC):
    """
    Abstract base class for persistence backends.
    Documents are plain dicts with camelCase keys and a generated "id".
    """
    
    backend_name: str = "base"
    
    @abstractmethod
    def list_all(self, kind: EntityKind, match: Optional[Dict[str, Any]] = None) -> List[dict]:
        """All documents of a kind (optionally filtered), in insertion order"""
        pass
    
    @abstractmethod
    def find_one(self, kind: EntityKind, match: Dict[str, Any]) -> Optional[dict]:
        pass
    
    @abstractmethod
    def insert(self, kind: EntityKind, doc: dict) -> dict:
        """Store a new document and return it with its generated id"""
        pass
    
    @abstractmethod
    def update_one(
        self,
        kind: EntityKind,
        match: Dict[str, Any],
        set_fields: Optional[Dict[str, Any]] = None,
        inc_fields: Optional[Dict[str, Any]] = None,
    ) -> Optional[dict]:
        """
        Update the first matching document.
        set_fields overwrite values, inc_fields are relative increments.
        Returns the updated document, or None when nothing matched.
        """
        pass
    
    @abstractmethod
    def delete_one(self, kind: EntityKind, match: Dict[str, Any]) -> bool:
        pass
    
    @abstractmethod
    def count(self, kind: EntityKind) -> int:
        pass
    
    @abstractmethod
    def aggregate(self, kind: EntityKind, spec: Aggregation) -> List[dict]:
        pass
    
    def close(self) -> None:
        """Release backend resources"""
        pass
