"""
Record Service - Incoming/outgoing stock movement records
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from app.core.exceptions import NotFound, ValidationError
from app.schemas.stock import RecordType, RecordCreate, RecordUpdate
from app.stores import DocumentStore, EntityKind
from .payload import parse_payload

logger = logging.getLogger(__name__)


def _without_fixed_fields(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if k not in ("type", "id")}
    return data


def _parse_type(record_type: str) -> RecordType:
    try:
        return RecordType(record_type)
    except ValueError:
        raise ValidationError(f"Record type must be 'incoming' or 'outgoing', got '{record_type}'")


class RecordService:
    """Stock movement business logic"""
    
    @staticmethod
    def list_records(store: DocumentStore, record_type: Optional[str] = None) -> List[dict]:
        if record_type:
            return store.list_all(EntityKind.RECORD, {"type": _parse_type(record_type).value})
        return store.list_all(EntityKind.RECORD)
    
    @staticmethod
    def get_record(store: DocumentStore, record_id: str) -> dict:
        record = store.find_one(EntityKind.RECORD, {"id": record_id})
        if not record:
            raise NotFound("Record not found")
        return record
    
    @staticmethod
    def create_record(store: DocumentStore, record_type: str, data: Dict[str, Any]) -> dict:
        """Create a movement; the path's type wins over any type in the body"""
        movement_type = _parse_type(record_type)
        record_data = parse_payload(RecordCreate, _without_fixed_fields(data))
        
        doc = record_data.model_dump(mode="json", by_alias=True)
        doc["type"] = movement_type.value
        if doc["date"] is None:
            doc["date"] = date.today().isoformat()
        
        record = store.insert(EntityKind.RECORD, doc)
        logger.info(f"Created {movement_type.value} record {record['id']} for {record['name']} x {record['quantity']}")
        return record
    
    @staticmethod
    def update_record(store: DocumentStore, record_id: str, data: Dict[str, Any]) -> dict:
        """Partial update; id and type are fixed at creation"""
        patch = parse_payload(RecordUpdate, _without_fixed_fields(data))
        fields = patch.model_dump(mode="json", by_alias=True, exclude_unset=True)
        
        record = store.update_one(EntityKind.RECORD, {"id": record_id}, set_fields=fields)
        if not record:
            raise NotFound("Record not found")
        return record
    
    @staticmethod
    def delete_record(store: DocumentStore, record_id: str) -> dict:
        record = RecordService.get_record(store, record_id)
        store.delete_one(EntityKind.RECORD, {"id": record_id})
        logger.info(f"Deleted record {record_id}")
        return record
    
    @staticmethod
    def export_records(store: DocumentStore, today: Optional[date] = None) -> Dict[str, Any]:
        """Full records export, split by movement type, with a dated filename"""
        records = store.list_all(EntityKind.RECORD)
        today = today or date.today()
        return {
            "filename": f"records-{today.isoformat()}.json",
            "content": {
                "incomingRecords": [r for r in records if r.get("type") == RecordType.INCOMING.value],
                "outgoingRecords": [r for r in records if r.get("type") == RecordType.OUTGOING.value],
            },
        }
