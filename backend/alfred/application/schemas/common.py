"""Shared Pydantic building blocks for the API envelope and camelCase wire format."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for every DTO: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope returned by every REST handler."""

    success: bool = True
    data: DataT | None = None
    message: str | None = None
    error: str | None = None


def to_payload(schema: type[CamelModel], entity: object) -> dict:
    """Serialise a domain entity the way the API returns it (JSON-safe, camelCase)."""
    return schema.model_validate(entity, from_attributes=True).model_dump(
        mode="json", by_alias=True
    )
