# Persistence Adapters
import logging

from .base import DocumentStore, EntityKind, Aggregation
from .file_store import JsonFileStore
from .sql_store import SqlStore

logger = logging.getLogger(__name__)

FILE_SCHEME = "file://"


def create_store(url: str, echo: bool = False) -> DocumentStore:
    """file://<directory> selects the JSON file store, anything else is a SQLAlchemy URL"""
    if url.startswith(FILE_SCHEME):
        directory = url[len(FILE_SCHEME):]
        logger.info(f"Using JSON file store at {directory}")
        return JsonFileStore(directory)
    
    logger.info(f"Using SQL store ({url.split(':', 1)[0]})")
    return SqlStore(url, echo=echo)


__all__ = [
    "DocumentStore",
    "EntityKind",
    "Aggregation",
    "JsonFileStore",
    "SqlStore",
    "create_store",
]
