"""
Local, persisted catalog store.

This package wires together:
- database (KeyedStore backends: memory, JSON files, Redis)
- contracts (record schemas, QuerySpec / PageResult)
- engine (filter / sort / paginate, related items)
- services (catalog, cart, wishlist, notifications, orders, reviews)
"""

from .container import ServiceContainer, create_services
from .errors import CatalogStoreError, InvalidArgument, StoreError

__all__ = [
    "CatalogStoreError",
    "InvalidArgument",
    "ServiceContainer",
    "StoreError",
    "create_services",
]
