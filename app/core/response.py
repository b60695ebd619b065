"""Standardized JSON response envelope helpers."""


from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Single-item response envelope: `{ success: true, data: {...} }`"""

    success: bool = True
    message: Optional[str] = None
    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class ListResponse(BaseModel, Generic[T]):
    """List response envelope: `{ success: true, data: [...] }`"""

    success: bool = True
    data: list[T]

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def ok(data, message: str | None = None) -> dict:
    """Build a success envelope dict for use with DataResponse / ListResponse."""
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body
