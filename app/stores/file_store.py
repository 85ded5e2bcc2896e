"""
JSON File Store - one JSON array per collection, rewritten on every mutation
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.core.exceptions import PersistenceError
from app.models.base import new_id
from .base import Aggregation, DocumentStore, EntityKind, matches, sort_groups

logger = logging.getLogger(__name__)


class JsonFileStore(DocumentStore):
    """
    Whole-collection read-modify-write.

    Writes are serialized per collection inside this process and the file is
    swapped in with os.replace. Separate processes sharing the directory are
    still last-writer-wins.
    """
    
    backend_name = "file"
    
    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._locks = {kind: threading.RLock() for kind in EntityKind}
    
    def _path(self, kind: EntityKind) -> Path:
        return self.directory / f"{kind.value}.json"
    
    def _read(self, kind: EntityKind) -> List[dict]:
        path = self._path(kind)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise PersistenceError(f"Could not read {kind.value}", str(e))
        if not isinstance(data, list):
            raise PersistenceError(f"Could not read {kind.value}", f"{path} does not hold a JSON array")
        return data
    
    def _write(self, kind: EntityKind, docs: List[dict]) -> None:
        path = self._path(kind)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(docs, indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except (OSError, TypeError) as e:
            logger.error(f"Failed to write {path}: {e}")
            raise PersistenceError(f"Could not write {kind.value}", str(e))
    
    def list_all(self, kind: EntityKind, match: Optional[Dict[str, Any]] = None) -> List[dict]:
        with self._locks[kind]:
            docs = self._read(kind)
        return [dict(doc) for doc in docs if matches(doc, match)]
    
    def find_one(self, kind: EntityKind, match: Dict[str, Any]) -> Optional[dict]:
        for doc in self.list_all(kind, match):
            return doc
        return None
    
    def insert(self, kind: EntityKind, doc: dict) -> dict:
        new_doc = {"id": new_id()}
        new_doc.update({k: v for k, v in doc.items() if k != "id"})
        with self._locks[kind]:
            docs = self._read(kind)
            docs.append(new_doc)
            self._write(kind, docs)
        return dict(new_doc)
    
    def update_one(
        self,
        kind: EntityKind,
        match: Dict[str, Any],
        set_fields: Optional[Dict[str, Any]] = None,
        inc_fields: Optional[Dict[str, Any]] = None,
    ) -> Optional[dict]:
        with self._locks[kind]:
            docs = self._read(kind)
            for doc in docs:
                if not matches(doc, match):
                    continue
                for key, value in (set_fields or {}).items():
                    if key != "id":
                        doc[key] = value
                for key, delta in (inc_fields or {}).items():
                    doc[key] = (doc.get(key) or 0) + delta
                self._write(kind, docs)
                return dict(doc)
        return None
    
    def delete_one(self, kind: EntityKind, match: Dict[str, Any]) -> bool:
        with self._locks[kind]:
            docs = self._read(kind)
            for index, doc in enumerate(docs):
                if matches(doc, match):
                    del docs[index]
                    self._write(kind, docs)
                    return True
        return False
    
    def count(self, kind: EntityKind) -> int:
        with self._locks[kind]:
            return len(self._read(kind))
    
    def aggregate(self, kind: EntityKind, spec: Aggregation) -> List[dict]:
        totals = {}
        for doc in self.list_all(kind, spec.match):
            key = doc.get(spec.group_by)
            if key is None:
                continue
            totals[key] = totals.get(key, 0) + spec.value_of(doc)
        
        rows = [{"key": key, "total": total} for key, total in totals.items()]
        return sort_groups(rows, spec.limit)
