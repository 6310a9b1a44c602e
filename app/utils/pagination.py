import math
from dataclasses import dataclass
from app.schemas.common import Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
MAX_LIMIT = 100


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default

def normalize(page: int | str | None, limit: int | str | None) -> tuple[int, int]:
    """Query-string paging; anything missing, non-numeric or non-positive falls back to the default."""
    page = _positive_int(page, DEFAULT_PAGE)
    limit = _positive_int(limit, DEFAULT_LIMIT)
    return page, min(limit, MAX_LIMIT)

def parse_flag(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() == "true"


@dataclass
class Page:
    items: list
    page: int
    limit: int
    total: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def meta(self) -> Pagination:
        return Pagination(page=self.page, limit=self.limit, total=self.total, total_pages=self.total_pages)
