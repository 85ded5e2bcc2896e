"""
Domain Errors - mapped to HTTP status codes at the API boundary
"""
from typing import Optional


class InventoryError(Exception):
    """Base error carrying a client-facing message"""
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class ValidationError(InventoryError):
    """Missing or malformed required field"""
    status_code = 400


class InvalidInputError(ValidationError):
    """Field present but unusable (e.g. non-numeric quantity change)"""


class NotFound(InventoryError):
    status_code = 404


class PersistenceError(InventoryError):
    """Backend read/write/aggregate failure"""
    status_code = 500
