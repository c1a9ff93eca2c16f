"""
Contracts (data models).

Record schemas persisted in the keyed store and the query shapes exchanged
with the engine. Services, engine and store backends all speak these types;
nothing downstream should pass ad-hoc dicts around.
"""

from .query import FilterSet, PageResult, QuerySpec, SortKey
from .records import (
    Address,
    CartItem,
    CatalogItem,
    Category,
    Color,
    NotificationRecord,
    NotificationType,
    OrderRecord,
    OrderStatus,
    ReviewRecord,
    Seller,
    Story,
    StoryMediaType,
    User,
    UserPreferences,
)

__all__ = [
    # query
    "FilterSet", "PageResult", "QuerySpec", "SortKey",
    # records
    "Address", "CartItem", "CatalogItem", "Category", "Color",
    "NotificationRecord", "NotificationType", "OrderRecord", "OrderStatus",
    "ReviewRecord", "Seller", "Story", "StoryMediaType", "User", "UserPreferences",
]
