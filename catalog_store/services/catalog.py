"""
Catalog browsing: the product shelves, category pages and search results the
app screens ask for, plus product / category / seller lookups and writes.

Every read loads one snapshot of the products collection and hands it to the
query engine. Seller storefront variants restrict the snapshot to that
seller's items before the generic query runs.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from catalog_store.contracts.query import FilterSet, PageResult, QuerySpec, SortKey
from catalog_store.contracts.records import CatalogItem, Category, Seller
from catalog_store.database.collections import CATEGORIES, PRODUCTS, SELLERS
from catalog_store.engine.query import apply_filters, paginate, query
from catalog_store.engine.recommender import DEFAULT_LIMIT, DEFAULT_PRICE_TOLERANCE, related_to
from catalog_store.errors import StoreError
from catalog_store.services.base import CollectionService

logger = logging.getLogger(__name__)

IdLike = Union[str, int]


def _ids(values: Optional[Iterable[IdLike]]) -> List[str]:
    # Category ids arrive as numbers from some screens.
    return [str(v) for v in (values or [])]


class CatalogService(CollectionService):
    def __init__(
        self,
        store,
        error_handler=None,
        default_limit: int = 20,
        related_limit: int = DEFAULT_LIMIT,
        price_tolerance=DEFAULT_PRICE_TOLERANCE,
    ):
        super().__init__(store, error_handler)
        self.default_limit = default_limit
        self.related_limit = related_limit
        self.price_tolerance = Decimal(str(price_tolerance))

    # ------------------------------------------------------------------ #
    # Browse / query
    # ------------------------------------------------------------------ #
    async def browse(self, spec: Optional[QuerySpec] = None) -> PageResult[CatalogItem]:
        """Generic catalog listing: any FilterSet, any sort key, one page."""
        products = await self._load(PRODUCTS)
        return query(products, spec or QuerySpec(limit=self.default_limit))

    async def _scoped_query(
        self,
        filters: FilterSet,
        sort_by: Optional[SortKey],
        page: int,
        limit: int,
        seller_id: Optional[str] = None,
    ) -> PageResult[CatalogItem]:
        products = await self._load(PRODUCTS)
        prefilter = (lambda p: p.seller.id == seller_id) if seller_id else None
        return query(products, QuerySpec(filters=filters, sort_by=sort_by, page=page, limit=limit), prefilter=prefilter)

    async def browse_category(
        self,
        category_id: IdLike,
        page: int = 1,
        limit: int = 13,
        *,
        min_price=0,
        max_price=999999,
        min_rating: Optional[float] = None,
        search: str = "",
        seller_id: Optional[str] = None,
    ) -> PageResult[CatalogItem]:
        """Latest products of one category, newest first."""
        filters = FilterSet(
            category_id=str(category_id),
            min_price=min_price,
            max_price=max_price,
            min_rating=min_rating,
            search=search or None,
        )
        return await self._scoped_query(filters, SortKey.NEWEST, page, limit, seller_id)

    async def most_reviewed(
        self,
        category_ids: Optional[Sequence[IdLike]] = None,
        page: int = 1,
        limit: int = 25,
        *,
        min_price=0,
        max_price=9999999999,
        min_rating: Optional[float] = None,
        search: str = "",
        seller_id: Optional[str] = None,
    ) -> PageResult[CatalogItem]:
        """Products ordered by review count, optionally within some categories."""
        filters = FilterSet(
            category_ids=_ids(category_ids),
            min_price=min_price,
            max_price=max_price,
            min_rating=min_rating,
            search=search or None,
        )
        return await self._scoped_query(filters, SortKey.POPULARITY, page, limit, seller_id)

    async def popular(
        self,
        category_ids: Optional[Sequence[IdLike]] = None,
        page: int = 1,
        limit: int = 10,
        *,
        sort: Union[SortKey, str, None] = None,
        min_price=0,
        max_price=9999999999,
        min_rating: Optional[float] = None,
        search: str = "",
        seller_id: Optional[str] = None,
    ) -> PageResult[CatalogItem]:
        """
        Popular products. ``sort`` may ask for price high/low; anything else
        (including "review_count") orders by popularity.
        """
        sort_by = SortKey.parse(sort)
        if sort_by not in (SortKey.PRICE_HIGH, SortKey.PRICE_LOW):
            sort_by = SortKey.POPULARITY
        filters = FilterSet(
            category_ids=_ids(category_ids),
            min_price=min_price,
            max_price=max_price,
            min_rating=min_rating,
            search=search or None,
        )
        return await self._scoped_query(filters, sort_by, page, limit, seller_id)

    async def search(
        self,
        text: str,
        page: int = 1,
        limit: int = 20,
        filters: Optional[FilterSet] = None,
        seller_id: Optional[str] = None,
    ) -> PageResult[CatalogItem]:
        """Keyword search over name, description and brand, in catalog order."""
        merged = replace(filters or FilterSet(), search=text or None)
        return await self._scoped_query(merged, None, page, limit, seller_id)

    # --- Shelves -------------------------------------------------------------

    async def _shelf(self, filters: FilterSet, limit: int) -> List[CatalogItem]:
        products = await self._load(PRODUCTS)
        return paginate(apply_filters(products, filters), 1, limit).items

    async def featured(self, limit: int = 10) -> List[CatalogItem]:
        return await self._shelf(FilterSet(is_featured=True), limit)

    async def new_arrivals(self, limit: int = 10) -> List[CatalogItem]:
        return await self._shelf(FilterSet(is_new=True), limit)

    async def on_sale(self, limit: int = 10) -> List[CatalogItem]:
        return await self._shelf(FilterSet(on_sale=True), limit)

    # --- Related items -------------------------------------------------------

    async def related(self, product_id: str, limit: Optional[int] = None) -> List[CatalogItem]:
        """
        "You may also like" for a product page. A storage failure here is
        not worth failing the page over: it is logged and no suggestions are
        shown.
        """
        if limit is None:
            limit = self.related_limit
        try:
            products = await self._load(PRODUCTS)
        except StoreError as e:
            return self.error_handler.handle_store_failure(
                e, "related", fallback=[], context={"product_id": product_id}
            )
        return related_to(products, product_id, limit, self.price_tolerance)

    # ------------------------------------------------------------------ #
    # Products
    # ------------------------------------------------------------------ #
    async def get_product(self, product_id: str) -> Optional[CatalogItem]:
        return await self._find(PRODUCTS, product_id)

    async def save_product(self, product: CatalogItem) -> CatalogItem:
        """Insert or replace a product; a replaced product keeps its position."""
        return await self._upsert(PRODUCTS, product)

    async def save_products(self, products: Iterable[CatalogItem]) -> int:
        """Bulk upsert in one read-modify-write."""
        current = await self._load(PRODUCTS)
        index = {p.id: i for i, p in enumerate(current)}
        count = 0
        for product in products:
            if product.id in index:
                current[index[product.id]] = product
            else:
                index[product.id] = len(current)
                current.append(product)
            count += 1
        await self._save(PRODUCTS, current)
        logger.info("Saved %d products (%d in catalog)", count, len(current))
        return count

    async def remove_product(self, product_id: str) -> bool:
        return await self._remove(PRODUCTS, product_id)

    # ------------------------------------------------------------------ #
    # Categories & sellers
    # ------------------------------------------------------------------ #
    async def categories(self) -> List[Category]:
        return await self._load(CATEGORIES)

    async def get_category(self, category_id: IdLike) -> Optional[Category]:
        return await self._find(CATEGORIES, str(category_id))

    async def save_category(self, category: Category) -> Category:
        # Products keep the copy embedded when they were saved.
        return await self._upsert(CATEGORIES, category)

    async def sellers(self) -> List[Seller]:
        return await self._load(SELLERS)

    async def get_seller(self, seller_id: str) -> Optional[Seller]:
        return await self._find(SELLERS, seller_id)

    async def save_seller(self, seller: Seller) -> Seller:
        return await self._upsert(SELLERS, seller)
