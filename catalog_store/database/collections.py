"""
Named collections and the keys they live under.

Shared collections use their name as the key. Per-user collections append
the user id (``wishlist_<userId>``, ``notifications_<userId>``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type

from catalog_store.contracts.records import (
    CartItem,
    CatalogItem,
    Category,
    NotificationRecord,
    OrderRecord,
    ReviewRecord,
    Seller,
    Story,
    User,
)
from catalog_store.database.keyed_store import KeyedStore
from catalog_store.error_handler import ErrorHandler
from catalog_store.errors import InvalidArgument, StoreError

logger = logging.getLogger(__name__)

PRODUCTS = "products"
CATEGORIES = "categories"
SELLERS = "sellers"
ORDERS = "orders"
REVIEWS = "reviews"
USERS = "users"
STORIES = "stories"
CART = "cart"
WISHLIST = "wishlist"
NOTIFICATIONS = "notifications"

COLLECTION_MODELS: Dict[str, Type[Any]] = {
    PRODUCTS: CatalogItem,
    CATEGORIES: Category,
    SELLERS: Seller,
    ORDERS: OrderRecord,
    REVIEWS: ReviewRecord,
    USERS: User,
    STORIES: Story,
    CART: CartItem,
    WISHLIST: str,                      # product ids
    NOTIFICATIONS: NotificationRecord,
}

USER_SCOPED = frozenset({WISHLIST, NOTIFICATIONS})

SHARED_COLLECTIONS = tuple(name for name in COLLECTION_MODELS if name not in USER_SCOPED)


def collection_key(name: str, user_id: Optional[str] = None) -> str:
    """
    Resolve the store key for a named collection.

    Raises:
        InvalidArgument: unknown collection, or a per-user collection
            requested without a user id.
    """
    if name not in COLLECTION_MODELS:
        raise InvalidArgument(f"Unknown collection: {name!r}")
    if name in USER_SCOPED:
        if not user_id:
            raise InvalidArgument(f"Collection {name!r} is per-user and needs a user_id")
        return f"{name}_{user_id}"
    return name


def record_model(name: str) -> Type[Any]:
    if name not in COLLECTION_MODELS:
        raise InvalidArgument(f"Unknown collection: {name!r}")
    return COLLECTION_MODELS[name]


async def initialize_store(store: KeyedStore, error_handler: Optional[ErrorHandler] = None) -> bool:
    """
    Create every shared collection as an empty list unless the catalog is
    already populated.

    The initial read of ``products`` is strict: a payload that fails to load
    raises StoreError and nothing is written. The writes after it are
    best-effort: a failing collection is logged and skipped so the remaining
    ones are still created. Returns True when anything was initialized.
    """
    error_handler = error_handler or ErrorHandler()

    existing = await store.get_collection(PRODUCTS, CatalogItem)
    if existing:
        logger.info("Catalog store already initialized (%d products)", len(existing))
        return False

    logger.info("Initializing catalog store with empty collections")
    for name in SHARED_COLLECTIONS:
        try:
            if name != PRODUCTS and await store.exists(name):
                continue
            await store.put_collection(name, COLLECTION_MODELS[name], [])
        except StoreError as e:
            error_handler.handle_store_failure(e, "initialize_store", context={"collection": name})
    return True
