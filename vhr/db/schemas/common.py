from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Envelope(CamelModel, Generic[T]):
    success: bool = True
    data: T
    message: Optional[str] = None


class Page(CamelModel, Generic[T]):
    success: bool = True
    data: List[T]
    page: int
    limit: int
    total_pages: int
    total_items: int


class MessageResponse(CamelModel):
    success: bool = True
    message: str
