"""Page requests and page results shared by every paginated read path."""

import math
from dataclasses import dataclass, field
from typing import Any

from protean.exceptions import ValidationError


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page number, page size and a single sort column."""

    page: int = 0
    size: int = 10
    sort_by: str = "id"
    sort_dir: str = "asc"

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def order_by(self) -> str:
        return f"-{self.sort_by}" if self.sort_dir.lower() == "desc" else self.sort_by

    def checked(self, sortable: frozenset[str]) -> "PageRequest":
        """Return self after rejecting unknown sort columns and bad bounds."""
        if self.sort_by not in sortable:
            raise ValidationError({"sort_by": [f"Cannot sort by '{self.sort_by}'"]})
        if self.sort_dir.lower() not in ("asc", "desc"):
            raise ValidationError({"sort_dir": ["Sort direction must be 'asc' or 'desc'"]})
        if self.page < 0 or self.size < 1:
            raise ValidationError({"page": ["Page must be >= 0 and size >= 1"]})
        return self


@dataclass(frozen=True)
class Page:
    items: list[Any] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @classmethod
    def from_result_set(cls, result_set, request: PageRequest) -> "Page":
        return cls(items=list(result_set.items), total=result_set.total, page=request.page, size=request.size)
