"""Base schema for the form payloads and the /health body."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Browser forms post camelCase JSON; ORM rows are read by attribute.

    Surrounding whitespace is stripped from every string so a field of
    spaces fails ``min_length`` like an empty one.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class HealthResponse(CamelModel):
    status: str = "ok"
    app: str
    env: str
    ai_enabled: bool = False
    storage_enabled: bool = False
