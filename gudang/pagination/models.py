from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

Primitive = Union[str, int, float, bool]
PageParams = Dict[str, Primitive]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class PageInfo(BaseModel):
    """Pagination metadata as reported by the API (``totalPages`` on the wire)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # no range checks: the server echoes whatever page and limit it was sent
    page: int = Field(default=DEFAULT_PAGE)
    limit: int = Field(default=DEFAULT_LIMIT)
    total: int = Field(default=0)
    total_pages: int = Field(default=0, alias="totalPages")

    @classmethod
    def empty(cls) -> "PageInfo":
        return cls(page=DEFAULT_PAGE, limit=DEFAULT_LIMIT, total=0, total_pages=0)

    @classmethod
    def from_total(cls, page: int, limit: int, total: int) -> "PageInfo":
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(page=page, limit=limit, total=total, total_pages=total_pages)

    def has_next(self) -> bool:
        return self.page < self.total_pages

    def has_prev(self) -> bool:
        return self.page > 1

    def to_wire(self) -> Dict[str, int]:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class ControllerState:
    """Snapshot of a controller, handed to listeners after every change."""

    items: List[Any] = field(default_factory=list)
    loading: bool = False
    page_info: PageInfo = field(default_factory=PageInfo.empty)
    params: PageParams = field(default_factory=dict)
