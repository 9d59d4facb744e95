"""
Offset pagination arithmetic shared by the collection endpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .params import parse_leading_int

PAGE_SIZE = 10


@dataclass(frozen=True)
class Page:
    page: int
    total_pages: int
    page_size: int
    count: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def metadata(self) -> dict[str, int]:
        return {
            "page": self.page,
            "totalPages": self.total_pages,
            "pageSize": self.page_size,
            "count": self.count,
        }


def parse_page(raw: str | None) -> int:
    """
    Lenient `?page=` parsing: the leading integer ("2.5" -> 2), or 1 when
    there is none or it is zero.
    """
    return parse_leading_int(raw) or 1


def paginate(count: int, requested_page: int, page_size: int = PAGE_SIZE) -> Page:
    total_pages = math.ceil(count / page_size) if count > 0 else 0
    page = min(requested_page, total_pages)
    page = max(page, 1)
    return Page(page=page, total_pages=total_pages, page_size=page_size, count=count)
