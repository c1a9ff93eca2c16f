"""
Collection services.

Named entry points the app screens call: catalog browsing and search, cart,
wishlist, notifications, orders, reviews, users and stories. Each service receives the store
handle explicitly; there is no module-level store.

Key rule:
- Services load a full collection, change it in memory and write the whole
  collection back. Failed writes are always raised to the caller.
"""

from .cart import CartService, CartSummary
from .catalog import CatalogService
from .notifications import NotificationService
from .orders import OrderService
from .reviews import ReviewService
from .stories import StoryService
from .users import UserService
from .wishlist import WishlistService

__all__ = [
    "CartService",
    "CartSummary",
    "CatalogService",
    "NotificationService",
    "OrderService",
    "ReviewService",
    "StoryService",
    "UserService",
    "WishlistService",
]
