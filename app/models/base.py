"""
Base Model Mixins
"""
from sqlalchemy import Column, Integer, String
from decimal import Decimal
import uuid

def new_id() -> str:
    return str(uuid.uuid4())

class DocumentMixin:
    """
    Integer surrogate key (keeps insertion order) plus the public string id.

    DOC_FIELDS maps document keys to column attributes; it drives the
    conversion between stored rows and the dicts the services work with.
    """
    DOC_FIELDS = {}

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True, default=new_id)

    def to_document(self) -> dict:
        doc = {"id": self.id}
        for key, attr in self.DOC_FIELDS.items():
            value = getattr(self, attr)
            if isinstance(value, Decimal):
                value = float(value)
            doc[key] = value
        return doc

    @classmethod
    def column_for(cls, key: str):
        """Resolve a document key to its mapped column"""
        if key == "id":
            return cls.id
        attr = cls.DOC_FIELDS.get(key)
        if attr is None:
            return None
        return getattr(cls, attr)
