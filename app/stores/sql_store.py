"""
SQL Store - SQLAlchemy-backed document store
"""
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, false
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import Base, build_engine, build_session_factory
from app.core.exceptions import PersistenceError
from app.models import Product, StockRecord, Customer
from .base import Aggregation, DocumentStore, EntityKind

logger = logging.getLogger(__name__)

MODELS = {
    EntityKind.PRODUCT: Product,
    EntityKind.RECORD: StockRecord,
    EntityKind.CUSTOMER: Customer,
}


def _number(value):
    if value is None:
        return 0
    if isinstance(value, Decimal):
        return float(value)
    return value


class SqlStore(DocumentStore):
    """
    Per-row atomic operations; relative increments run as
    UPDATE ... SET col = col + :delta and aggregation as GROUP BY.
    """
    
    backend_name = "sql"
    
    def __init__(self, url: str, echo: bool = False):
        self.engine = build_engine(url, echo=echo)
        Base.metadata.create_all(bind=self.engine)
        self.SessionLocal = build_session_factory(self.engine)
    
    @contextmanager
    def _session(self):
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error: {e}")
            raise PersistenceError("Database operation failed", str(e))
        finally:
            db.close()
    
    @staticmethod
    def _filters(model, match: Optional[Dict[str, Any]]) -> list:
        clauses = []
        for key, value in (match or {}).items():
            column = model.column_for(key)
            if column is None:
                clauses.append(false())
            elif value is None:
                clauses.append(column.is_(None))
            else:
                clauses.append(column == value)
        return clauses
    
    def list_all(self, kind: EntityKind, match: Optional[Dict[str, Any]] = None) -> List[dict]:
        model = MODELS[kind]
        with self._session() as db:
            rows = db.query(model).filter(*self._filters(model, match)).order_by(model.pk).all()
            return [row.to_document() for row in rows]
    
    def find_one(self, kind: EntityKind, match: Dict[str, Any]) -> Optional[dict]:
        model = MODELS[kind]
        with self._session() as db:
            row = db.query(model).filter(*self._filters(model, match)).order_by(model.pk).first()
            return row.to_document() if row else None
    
    def insert(self, kind: EntityKind, doc: dict) -> dict:
        model = MODELS[kind]
        values = {attr: doc[key] for key, attr in model.DOC_FIELDS.items() if key in doc}
        with self._session() as db:
            row = model(**values)
            db.add(row)
            db.flush()
            return row.to_document()
    
    def update_one(
        self,
        kind: EntityKind,
        match: Dict[str, Any],
        set_fields: Optional[Dict[str, Any]] = None,
        inc_fields: Optional[Dict[str, Any]] = None,
    ) -> Optional[dict]:
        model = MODELS[kind]
        with self._session() as db:
            row = db.query(model).filter(*self._filters(model, match)).order_by(model.pk).first()
            if row is None:
                return None
            
            values = {}
            for key, value in (set_fields or {}).items():
                column = model.column_for(key)
                if column is not None and key != "id":
                    values[column] = value
            for key, delta in (inc_fields or {}).items():
                column = model.column_for(key)
                if column is not None:
                    values[column] = func.coalesce(column, 0) + delta
            
            if values:
                db.query(model).filter(model.pk == row.pk).update(values, synchronize_session=False)
                db.flush()
                db.refresh(row)
            return row.to_document()
    
    def delete_one(self, kind: EntityKind, match: Dict[str, Any]) -> bool:
        model = MODELS[kind]
        with self._session() as db:
            row = db.query(model).filter(*self._filters(model, match)).order_by(model.pk).first()
            if row is None:
                return False
            db.delete(row)
            return True
    
    def count(self, kind: EntityKind) -> int:
        model = MODELS[kind]
        with self._session() as db:
            return db.query(func.count(model.pk)).scalar() or 0
    
    def aggregate(self, kind: EntityKind, spec: Aggregation) -> List[dict]:
        model = MODELS[kind]
        key_column = model.column_for(spec.group_by)
        if key_column is None:
            return []
        
        if spec.sum_of:
            expr = model.column_for(spec.sum_of[0])
            for name in spec.sum_of[1:]:
                expr = expr * model.column_for(name)
            total = func.sum(expr).label("total")
        else:
            total = func.count(model.pk).label("total")
        
        with self._session() as db:
            query = db.query(key_column.label("key"), total).filter(
                *self._filters(model, spec.match),
                key_column.isnot(None)
            ).group_by(key_column).order_by(total.desc(), key_column.asc())
            
            if spec.limit is not None:
                query = query.limit(spec.limit)
            
            return [{"key": row.key, "total": _number(row.total)} for row in query.all()]
    
    def close(self) -> None:
        self.engine.dispose()
