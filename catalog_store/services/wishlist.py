"""
Wishlist: a per-user list of product ids under ``wishlist_<userId>``.
"""

from __future__ import annotations

from typing import List

from catalog_store.contracts.records import CatalogItem
from catalog_store.database.collections import PRODUCTS, WISHLIST
from catalog_store.services.base import CollectionService


class WishlistService(CollectionService):
    async def product_ids(self, user_id: str) -> List[str]:
        return await self._load(WISHLIST, user_id)

    async def get_wishlist(self, user_id: str) -> List[CatalogItem]:
        """Wishlisted products in catalog order. Ids no longer in the catalog are skipped."""
        wanted = set(await self.product_ids(user_id))
        if not wanted:
            return []
        products = await self._load(PRODUCTS)
        return [p for p in products if p.id in wanted]

    async def contains(self, user_id: str, product_id: str) -> bool:
        return product_id in await self.product_ids(user_id)

    async def add(self, user_id: str, product_id: str) -> bool:
        ids = await self.product_ids(user_id)
        if product_id in ids:
            return False
        ids.append(product_id)
        await self._save(WISHLIST, ids, user_id)
        return True

    async def remove(self, user_id: str, product_id: str) -> bool:
        ids = await self.product_ids(user_id)
        if product_id not in ids:
            return False
        await self._save(WISHLIST, [i for i in ids if i != product_id], user_id)
        return True

    async def clear(self, user_id: str) -> None:
        await self._clear(WISHLIST, user_id)
