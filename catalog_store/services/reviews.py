"""
Product reviews, kept in one shared ``reviews`` collection.
"""

from __future__ import annotations

from typing import Optional

from catalog_store.contracts.query import PageResult
from catalog_store.contracts.records import ReviewRecord
from catalog_store.database.collections import REVIEWS
from catalog_store.engine.query import paginate
from catalog_store.services.base import CollectionService


class ReviewService(CollectionService):
    async def product_reviews(self, product_id: str, page: int = 1, limit: int = 10) -> PageResult[ReviewRecord]:
        reviews = await self._load(REVIEWS)
        return paginate([r for r in reviews if r.product_id == product_id], page, limit)

    async def add_review(self, review: ReviewRecord) -> ReviewRecord:
        reviews = await self._load(REVIEWS)
        reviews.append(review)
        await self._save(REVIEWS, reviews)
        return review

    async def average_rating(self, product_id: str) -> Optional[float]:
        ratings = [r.rating for r in await self._load(REVIEWS) if r.product_id == product_id]
        if not ratings:
            return None
        return round(sum(ratings) / len(ratings), 2)
