"""
Query contracts shared by the engine and the collection services.

A QuerySpec is what callers hand to the engine; a PageResult is what comes
back. Both are plain dataclasses so screens and scripts can build them
without touching the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Generic, List, Optional, TypeVar, Union

T = TypeVar("T")

Number = Union[int, float, Decimal]


class SortKey(str, Enum):
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
    RATING = "rating"
    NEWEST = "newest"
    POPULARITY = "popularity"

    @classmethod
    def parse(cls, value: Union["SortKey", str, None]) -> Optional["SortKey"]:
        """Resolve a caller-supplied sort key; unknown values mean "no sort"."""
        if value is None or isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        normalized = _SORT_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return None


# "most reviewed" and "popularity" are the same ordering.
_SORT_ALIASES = {
    "most_reviewed": "popularity",
    "review_count": "popularity",
    "low": "price_low",
    "high": "price_high",
}


@dataclass
class FilterSet:
    """
    Conjunction of optional predicates. ``None`` (or an empty list) means
    "no constraint" for that field.
    """
    category_id: Optional[str] = None
    category_ids: List[str] = field(default_factory=list)      # any of
    category_names: List[str] = field(default_factory=list)    # any of
    seller_id: Optional[str] = None
    min_price: Optional[Number] = None
    max_price: Optional[Number] = None
    min_rating: Optional[float] = None
    in_stock: Optional[bool] = None
    on_sale: Optional[bool] = None
    is_new: Optional[bool] = None
    is_featured: Optional[bool] = None
    brand: Optional[str] = None
    brands: List[str] = field(default_factory=list)            # any of
    size: Optional[str] = None
    sizes: List[str] = field(default_factory=list)             # any match
    search: Optional[str] = None                               # name/description/brand


@dataclass
class QuerySpec:
    filters: FilterSet = field(default_factory=FilterSet)
    sort_by: Union[SortKey, str, None] = None
    page: int = 1
    limit: int = 20


@dataclass
class PageResult(Generic[T]):
    items: List[T]
    page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool
