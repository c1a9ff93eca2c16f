import pytest
import pytest_asyncio

from catalog_store.contracts.query import FilterSet, QuerySpec
from catalog_store.contracts.records import Category, Seller
from catalog_store.database.memory import MemoryStore
from catalog_store.errors import InvalidArgument, StoreError
from catalog_store.services.catalog import CatalogService


def _ids(items):
    return [p.id for p in items]


@pytest_asyncio.fixture
async def catalog(store, scenario_items):
    service = CatalogService(store)
    await service.save_products(scenario_items)
    return service


@pytest.mark.asyncio
async def test_browse_runs_the_query_engine(catalog):
    page = await catalog.browse(QuerySpec(filters=FilterSet(min_price=60, max_price=110), sort_by="price_low"))

    assert _ids(page.items) == ["A", "C"]
    assert page.total_items == 2


@pytest.mark.asyncio
async def test_browse_defaults_to_first_page(catalog):
    page = await catalog.browse()
    assert page.page == 1
    assert page.items_per_page == 20
    assert len(page.items) == 5


@pytest.mark.asyncio
async def test_get_product_and_missing_product(catalog):
    assert (await catalog.get_product("C")).brand == "X"
    assert await catalog.get_product("nope") is None


@pytest.mark.asyncio
async def test_save_product_replaces_in_place(catalog, item_factory):
    await catalog.save_product(item_factory("C", category="2", brand="X", price=99))

    page = await catalog.browse(QuerySpec(limit=10))

    assert _ids(page.items) == ["A", "B", "C", "D", "E"]
    assert (await catalog.get_product("C")).price == 99


@pytest.mark.asyncio
async def test_remove_product_is_idempotent(catalog):
    assert await catalog.remove_product("B") is True
    after_once = await catalog.browse(QuerySpec(limit=10))

    assert await catalog.remove_product("B") is False
    after_twice = await catalog.browse(QuerySpec(limit=10))

    assert _ids(after_once.items) == _ids(after_twice.items) == ["A", "C", "D", "E"]


@pytest.mark.asyncio
async def test_browse_category_is_newest_first_and_accepts_numeric_ids(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_products([
        item_factory("old", category="7", age_days=9),
        item_factory("other", category="8", age_days=0),
        item_factory("new", category="7", age_days=1),
    ])

    page = await catalog.browse_category(7)

    assert _ids(page.items) == ["new", "old"]


@pytest.mark.asyncio
async def test_browse_category_with_search_and_price(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_products([
        item_factory("1", category="7", name="Rose Serum", price=10),
        item_factory("2", category="7", name="Rose Cream", price=80),
        item_factory("3", category="7", name="Clay Mask", price=12),
    ])

    page = await catalog.browse_category("7", search="ROSE", max_price=50)

    assert _ids(page.items) == ["1"]


@pytest.mark.asyncio
async def test_most_reviewed_orders_by_review_count(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_products([
        item_factory("few", category="1", review_count=2),
        item_factory("many", category="2", review_count=40),
        item_factory("some", category="1", review_count=9),
        item_factory("elsewhere", category="3", review_count=99),
    ])

    page = await catalog.most_reviewed([1, 2])

    assert _ids(page.items) == ["many", "some", "few"]


@pytest.mark.asyncio
async def test_popular_sort_options(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_products([
        item_factory("cheap", price=5, review_count=1),
        item_factory("pricey", price=500, review_count=3),
        item_factory("mid", price=50, review_count=10),
    ])

    assert _ids((await catalog.popular()).items) == ["mid", "pricey", "cheap"]
    assert _ids((await catalog.popular(sort="high")).items) == ["pricey", "mid", "cheap"]
    assert _ids((await catalog.popular(sort="price_low")).items) == ["cheap", "mid", "pricey"]
    assert _ids((await catalog.popular(sort="review_count")).items) == ["mid", "pricey", "cheap"]
    assert _ids((await catalog.popular(sort="rating")).items) == ["mid", "pricey", "cheap"]


@pytest.mark.asyncio
async def test_seller_scoped_queries_only_see_that_sellers_items(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_products([
        item_factory("mine-1", seller="me", name="Lip Tint"),
        item_factory("theirs", seller="them", name="Lip Gloss"),
        item_factory("mine-2", seller="me", name="Lip Balm"),
    ])

    page = await catalog.search("lip", seller_id="me")

    assert _ids(page.items) == ["mine-1", "mine-2"]


@pytest.mark.asyncio
async def test_search_keeps_catalog_order_and_extra_filters(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_products([
        item_factory("1", name="Glow Toner", rating=3.0),
        item_factory("2", name="Matte Primer", brand="GLOWCO", rating=4.8),
        item_factory("3", name="Glow Drops", rating=4.9),
    ])

    assert _ids((await catalog.search("glow")).items) == ["1", "2", "3"]
    assert _ids((await catalog.search("glow", filters=FilterSet(min_rating=4.5))).items) == ["2", "3"]
    assert (await catalog.search("glow", page=2, limit=2)).has_prev is True


@pytest.mark.asyncio
async def test_shelves(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_products([
        item_factory("f1", is_featured=True),
        item_factory("n1", is_new=True),
        item_factory("s1", is_on_sale=True),
        item_factory("f2", is_featured=True, is_on_sale=True),
    ])

    assert _ids(await catalog.featured()) == ["f1", "f2"]
    assert _ids(await catalog.featured(limit=1)) == ["f1"]
    assert _ids(await catalog.new_arrivals()) == ["n1"]
    assert _ids(await catalog.on_sale()) == ["s1", "f2"]
    with pytest.raises(InvalidArgument):
        await catalog.on_sale(limit=0)


@pytest.mark.asyncio
async def test_related_uses_layered_recommender(catalog):
    related = await catalog.related("A", limit=3)
    assert _ids(related)[:2] == ["B", "C"]


@pytest.mark.asyncio
async def test_related_degrades_to_empty_on_store_failure(caplog):
    class BrokenStore(MemoryStore):
        async def get_raw(self, key):
            raise StoreError("medium unavailable", key=key)

    catalog = CatalogService(BrokenStore())

    assert await catalog.related("A") == []
    assert "Store failure during related" in caplog.text


@pytest.mark.asyncio
async def test_mutations_do_not_swallow_store_failures(item_factory):
    class ReadOnlyStore(MemoryStore):
        async def put_raw(self, key, payload):
            raise StoreError("read-only", key=key)

    catalog = CatalogService(ReadOnlyStore())

    with pytest.raises(StoreError):
        await catalog.save_product(item_factory("p1"))


@pytest.mark.asyncio
async def test_embedded_category_copies_are_not_rewritten(store, item_factory):
    catalog = CatalogService(store)
    await catalog.save_category(Category(id="1", name="Skin"))
    await catalog.save_product(item_factory("p1", category="1"))

    await catalog.save_category(Category(id="1", name="Skincare"))

    assert (await catalog.get_category(1)).name == "Skincare"
    assert (await catalog.get_product("p1")).category.name == "Category 1"
    assert len(await catalog.categories()) == 1


@pytest.mark.asyncio
async def test_sellers(store):
    catalog = CatalogService(store)
    await catalog.save_seller(Seller(id="s1", name="Glow Shop"))

    assert (await catalog.get_seller("s1")).name == "Glow Shop"
    assert await catalog.get_seller("s2") is None
    assert [s.id for s in await catalog.sellers()] == ["s1"]
