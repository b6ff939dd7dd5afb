from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(BaseModel, Generic[T]):
    """One page of service results (the envelope adds the pagination block)."""

    items: List[T]
    page: int
    limit: int
    total: int


class NamedRef(CamelModel):
    id: str
    name: Optional[str] = None
