"""
Shared response envelope and field types.
"""

from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Decimal internally, JSON number on the wire.
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[T]):
    """Success envelope: ``{ok: true, data: ...}``."""
    ok: bool = True
    data: T


class ErrorResponse(BaseModel):
    """Error envelope: ``{ok: false, message[, error]}``."""
    ok: bool = False
    message: str
    error: str | None = None
