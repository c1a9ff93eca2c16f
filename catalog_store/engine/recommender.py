"""
"You may also like": related items by layered relaxation.

Candidates are taken in strict priority order, each layer adding only items
not already picked and keeping collection order within the layer:

    A. same category id
    B. same brand
    C. price within +/- tolerance of the target price
    D. same seller id
    E. anything else, until the limit is reached

There is no similarity score. A category match always outranks a brand
match, which outranks price proximity, which outranks a shared seller.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, List, Sequence, Union

from catalog_store.contracts.records import CatalogItem
from catalog_store.errors import InvalidArgument

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 8
DEFAULT_PRICE_TOLERANCE = Decimal("0.3")


def _layers(target: CatalogItem, tolerance: Decimal) -> List[Callable[[CatalogItem], bool]]:
    low = target.price * (1 - tolerance)
    high = target.price * (1 + tolerance)
    return [
        lambda p: p.category.id == target.category.id,
        lambda p: p.brand == target.brand,
        lambda p: low <= p.price <= high,
        lambda p: p.seller.id == target.seller.id,
    ]


def related_to(
    collection: Sequence[CatalogItem],
    target_id: str,
    limit: int = DEFAULT_LIMIT,
    price_tolerance: Union[Decimal, float, str] = DEFAULT_PRICE_TOLERANCE,
) -> List[CatalogItem]:
    """
    Items related to ``target_id``, never including the target itself.

    If the target is not in the collection the first ``limit`` items are
    returned instead, so a product page is never left without suggestions.

    Raises:
        InvalidArgument: limit < 1
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgument(f"limit must be an integer >= 1, got {limit!r}")

    target = next((p for p in collection if p.id == target_id), None)
    if target is None:
        logger.info("Related items: %s not found, falling back to first %d items", target_id, limit)
        return list(collection[:limit])

    tolerance = Decimal(str(price_tolerance))
    candidates = [i for i, p in enumerate(collection) if p.id != target_id]
    picked: List[int] = []
    seen = set()

    for matches in _layers(target, tolerance):
        for i in candidates:
            if i not in seen and matches(collection[i]):
                seen.add(i)
                picked.append(i)

    # Fill with whatever is left, in collection order.
    for i in candidates:
        if len(picked) >= limit:
            break
        if i not in seen:
            seen.add(i)
            picked.append(i)

    return [collection[i] for i in picked[:limit]]
