"""
Composition root: build the store, the error handler and every service from
one CatalogConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from catalog_store.database import KeyedStore, create_store, initialize_store
from catalog_store.error_handler import ErrorHandler
from catalog_store.services import (
    CartService,
    CatalogService,
    NotificationService,
    OrderService,
    ReviewService,
    StoryService,
    UserService,
    WishlistService,
)
from catalog_store.utils.config_loader import CatalogConfig

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    store: KeyedStore
    error_handler: ErrorHandler
    catalog: CatalogService
    cart: CartService
    wishlist: WishlistService
    notifications: NotificationService
    orders: OrderService
    reviews: ReviewService
    users: UserService
    stories: StoryService

    async def close(self) -> None:
        """Release the store (Redis connection pool). Call once on shutdown."""
        await self.store.close()
        logger.info("Catalog services closed")


async def create_services(
    config: Optional[CatalogConfig] = None,
    store: Optional[KeyedStore] = None,
) -> ServiceContainer:
    config = config or CatalogConfig()
    logging.basicConfig(level=config.logging.level)

    store = store or create_store(config.store)
    error_handler = ErrorHandler()
    await initialize_store(store, error_handler)

    container = ServiceContainer(
        store=store,
        error_handler=error_handler,
        catalog=CatalogService(
            store,
            error_handler,
            default_limit=config.pagination.default_limit,
            related_limit=config.recommendations.default_limit,
            price_tolerance=config.recommendations.price_tolerance,
        ),
        cart=CartService(store, error_handler),
        wishlist=WishlistService(store, error_handler),
        notifications=NotificationService(store, error_handler),
        orders=OrderService(store, error_handler),
        reviews=ReviewService(store, error_handler),
        users=UserService(store, error_handler),
        stories=StoryService(store, error_handler),
    )
    logger.info("Catalog services ready (%s)", type(store).__name__)
    return container
