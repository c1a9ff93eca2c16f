"""Pytest fixtures for catalog store tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from catalog_store.contracts.records import CatalogItem, Category, Seller
from catalog_store.database.memory import MemoryStore

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_item(
    item_id: str,
    *,
    category: str = "1",
    brand: str = "Acme",
    price=100,
    seller: str = None,
    rating: float = 4.0,
    review_count: int = 0,
    age_days: int = 0,
    **extra,
) -> CatalogItem:
    """Build a CatalogItem; every item gets its own seller unless one is given."""
    return CatalogItem(
        id=item_id,
        name=extra.pop("name", f"Item {item_id}"),
        description=extra.pop("description", f"Description of {item_id}"),
        price=Decimal(str(price)),
        category=Category(id=category, name=f"Category {category}"),
        brand=brand,
        seller=Seller(id=seller or f"seller-{item_id}", name=f"Seller of {item_id}"),
        rating=rating,
        review_count=review_count,
        created_at=BASE_TIME - timedelta(days=age_days),
        updated_at=BASE_TIME,
        **extra,
    )


@pytest.fixture
def store():
    """In-memory KeyedStore for tests."""
    return MemoryStore()


@pytest.fixture
def scenario_items():
    """A(cat 1, X, 100) B(cat 1, Y, 500) C(cat 2, X, 105) D(cat 2, Z, 900) E(cat 3, W, 50)."""
    return [
        make_item("A", category="1", brand="X", price=100),
        make_item("B", category="1", brand="Y", price=500),
        make_item("C", category="2", brand="X", price=105),
        make_item("D", category="2", brand="Z", price=900),
        make_item("E", category="3", brand="W", price=50),
    ]


@pytest.fixture
def item_factory():
    return make_item
