"""
Request payload parsing - pydantic errors become ValidationError (HTTP 400)
"""
from typing import Any, Type, TypeVar
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise ValidationError(f"Missing or invalid fields: {', '.join(fields)}", str(e))
