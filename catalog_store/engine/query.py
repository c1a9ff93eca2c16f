"""
Query engine: filter, stable sort and paginate an in-memory collection.

Pure functions over already-loaded records; nothing here touches the store.
The only error raised is InvalidArgument for bad pagination parameters.
Filters never throw: contradictory bounds (min_price > max_price) simply
match nothing.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, TypeVar, Union

from catalog_store.contracts.query import FilterSet, PageResult, QuerySpec, SortKey
from catalog_store.contracts.records import CatalogItem
from catalog_store.errors import InvalidArgument

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _matches_text(item: CatalogItem, needle: str) -> bool:
    return (
        needle in item.name.lower()
        or needle in item.description.lower()
        or needle in item.brand.lower()
    )


def apply_filters(items: Sequence[CatalogItem], f: Optional[FilterSet]) -> List[CatalogItem]:
    """Keep the items accepted by every supplied predicate, in their original order."""
    result = list(items)
    if f is None:
        return result

    if f.category_id is not None:
        result = [p for p in result if p.category.id == f.category_id]
    if f.category_ids:
        wanted = set(f.category_ids)
        result = [p for p in result if p.category.id in wanted]
    if f.category_names:
        wanted = set(f.category_names)
        result = [p for p in result if p.category.name in wanted]
    if f.seller_id is not None:
        result = [p for p in result if p.seller.id == f.seller_id]
    if f.min_price is not None:
        result = [p for p in result if p.price >= f.min_price]
    if f.max_price is not None:
        result = [p for p in result if p.price <= f.max_price]
    if f.min_rating is not None:
        result = [p for p in result if p.rating >= f.min_rating]
    if f.in_stock is not None:
        result = [p for p in result if p.in_stock == f.in_stock]
    if f.on_sale is not None:
        result = [p for p in result if p.is_on_sale == f.on_sale]
    if f.is_new is not None:
        result = [p for p in result if p.is_new == f.is_new]
    if f.is_featured is not None:
        result = [p for p in result if p.is_featured == f.is_featured]
    if f.brand is not None:
        result = [p for p in result if p.brand == f.brand]
    if f.brands:
        wanted = set(f.brands)
        result = [p for p in result if p.brand in wanted]
    if f.size is not None:
        result = [p for p in result if f.size in (p.sizes or [])]
    if f.sizes:
        wanted = set(f.sizes)
        result = [p for p in result if wanted.intersection(p.sizes or [])]
    if f.search:
        needle = f.search.lower()
        result = [p for p in result if _matches_text(p, needle)]

    logger.debug("Filtered from %d to %d items", len(items), len(result))
    return result


def sort_timestamp(value: datetime) -> float:
    # Naive datetimes are treated as UTC so mixed documents still compare.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


# sort key -> (key function, descending)
_SORTS: Dict[SortKey, tuple] = {
    SortKey.PRICE_LOW: (lambda p: p.price, False),
    SortKey.PRICE_HIGH: (lambda p: p.price, True),
    SortKey.RATING: (lambda p: p.rating, True),
    SortKey.NEWEST: (lambda p: sort_timestamp(p.created_at), True),
    SortKey.POPULARITY: (lambda p: p.review_count, True),
}


def sort_items(items: Sequence[CatalogItem], sort_by: Union[SortKey, str, None]) -> List[CatalogItem]:
    """
    Stable sort by one of the known keys. Equal keys keep their relative
    order (``reverse=True`` in ``sorted`` preserves stability). Missing or
    unrecognized keys leave the order untouched.
    """
    key = SortKey.parse(sort_by)
    if key is None:
        if sort_by is not None:
            logger.debug("Ignoring unrecognized sort key %r", sort_by)
        return list(items)
    key_fn, descending = _SORTS[key]
    return sorted(items, key=key_fn, reverse=descending)


def _check_page_args(page: int, limit: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidArgument(f"page must be an integer >= 1, got {page!r}")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgument(f"limit must be an integer >= 1, got {limit!r}")


def paginate(items: Sequence[T], page: int, limit: int) -> PageResult[T]:
    """
    Slice one page out of ``items``. A page past the end comes back empty
    with ``has_next=False``; it is not an error.
    """
    _check_page_args(page, limit)
    total = len(items)
    start = (page - 1) * limit
    end = start + limit
    return PageResult(
        items=list(items[start:end]),
        page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
        has_next=page * limit < total,
        has_prev=page > 1,
    )


def query(
    collection: Sequence[CatalogItem],
    spec: QuerySpec,
    prefilter: Optional[Callable[[CatalogItem], bool]] = None,
) -> PageResult[CatalogItem]:
    """
    Run a QuerySpec over a loaded collection.

    Args:
        collection: Records in insertion order
        spec: Filters, sort key and page window
        prefilter: Optional domain restriction applied before the filters
            (e.g. a seller's own items)

    Returns:
        One page of matching records plus pagination metadata

    Raises:
        InvalidArgument: page < 1 or limit < 1
    """
    _check_page_args(spec.page, spec.limit)

    items = collection if prefilter is None else [p for p in collection if prefilter(p)]
    matched = apply_filters(items, spec.filters)
    ordered = sort_items(matched, spec.sort_by)
    return paginate(ordered, spec.page, spec.limit)
