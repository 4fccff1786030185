from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_snake

from jobhub.core.messages import Message

T = TypeVar("T")
U = TypeVar("U")

SORT_DIRECTIONS = ("asc", "desc")


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def parse_sort(value: Optional[str]) -> List[Tuple[str, str]]:
    """Parse ``field:direction[,field:direction...]`` into (snake_field, direction) pairs."""
    items: List[Tuple[str, str]] = []
    if not value:
        return items
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, _, direction = chunk.partition(":")
        direction = (direction or "asc").strip().lower()
        if not name.strip():
            raise ValueError(f"invalid sort expression '{chunk}'")
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"sort direction must be one of [{', '.join(SORT_DIRECTIONS)}]")
        items.append((to_snake(name.strip()), direction))
    return items


class BaseFilter(CamelModel):
    """Offset/limit/sort query parameters shared by every list endpoint."""

    accepted_sort_fields: ClassVar[Tuple[str, ...]] = ()

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=0, le=100)
    sort: Optional[str] = None

    @field_validator("sort")
    @classmethod
    def _validate_sort(cls, value: Optional[str]) -> Optional[str]:
        items = parse_sort(value)
        accepted = cls.accepted_sort_fields
        if accepted and any(name not in accepted for name, _ in items):
            raise ValueError(f"sortField must be in [{', '.join(to_camel(f) for f in accepted)}]")
        return value

    def sort_items(self) -> List[Tuple[str, str]]:
        return parse_sort(self.sort)


@dataclass
class PageResult(Generic[T]):
    items: List[T]
    total: int
    offset: int
    limit: int

    def map(self, fn: Callable[[T], U]) -> "PageResult[U]":
        return PageResult([fn(item) for item in self.items], self.total, self.offset, self.limit)


def success_response(data: Any = None, message: str = Message.SUCCESS) -> dict:
    """Wrap ``data`` in the uniform {success, message, data} envelope."""
    if isinstance(data, PageResult):
        return {
            "success": True,
            "message": message,
            "data": data.items,
            "pageInfo": {"total": data.total, "offset": data.offset, "limit": data.limit},
        }
    return {"success": True, "message": message, "data": data}


def error_response(message: str, data: Any = None) -> dict:
    return {"success": False, "message": message, "data": data}
