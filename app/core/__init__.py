from .config import settings, get_settings, Settings
from .database import Base, build_engine, build_session_factory, get_store
from .exceptions import InventoryError, ValidationError, InvalidInputError, NotFound, PersistenceError

__all__ = [
    "settings", "get_settings", "Settings",
    "Base", "build_engine", "build_session_factory", "get_store",
    "InventoryError", "ValidationError", "InvalidInputError", "NotFound", "PersistenceError",
]
