import pytest

from catalog_store.engine.recommender import related_to
from catalog_store.errors import InvalidArgument


def _ids(items):
    return [p.id for p in items]


def test_category_layer_then_brand_layer(scenario_items):
    related = related_to(scenario_items, "A", limit=3)

    assert _ids(related)[:2] == ["B", "C"]
    assert len(related) == 3
    assert "A" not in _ids(related)


def test_layers_come_in_strict_priority_order(item_factory):
    items = [
        item_factory("target", category="1", brand="X", price=100, seller="s1"),
        item_factory("seller_match", category="9", brand="Q", price=999, seller="s1"),
        item_factory("price_match", category="8", brand="R", price=120),
        item_factory("brand_match", category="7", brand="X", price=1),
        item_factory("category_match", category="1", brand="S", price=5000),
        item_factory("unrelated", category="6", brand="T", price=2000),
    ]

    related = related_to(items, "target", limit=10)

    assert _ids(related) == ["category_match", "brand_match", "price_match", "seller_match", "unrelated"]


def test_price_band_is_inclusive_thirty_percent(item_factory):
    items = [
        item_factory("target", category="1", brand="X", price=100),
        item_factory("low_edge", category="2", brand="Y", price=70),
        item_factory("too_low", category="3", brand="Z", price="69.99"),
        item_factory("high_edge", category="4", brand="W", price=130),
        item_factory("too_high", category="5", brand="V", price="130.01"),
    ]

    # limit 2: the price layer alone fills the result, no filler needed.
    assert _ids(related_to(items, "target", limit=2)) == ["low_edge", "high_edge"]


def test_price_tolerance_is_configurable(item_factory):
    items = [
        item_factory("target", category="1", brand="X", price=100),
        item_factory("far", category="2", brand="Y", price=150),
        item_factory("near", category="3", brand="Z", price=105),
    ]

    assert _ids(related_to(items, "target", limit=1, price_tolerance=0.1)) == ["near"]
    assert _ids(related_to(items, "target", limit=1, price_tolerance="0.5")) == ["far"]


def test_unknown_target_falls_back_to_first_items(scenario_items):
    assert _ids(related_to(scenario_items, "missing", limit=2)) == ["A", "B"]


def test_never_returns_target_and_respects_limit(scenario_items):
    for item in scenario_items:
        for limit in range(1, 7):
            related = related_to(scenario_items, item.id, limit=limit)
            assert item.id not in _ids(related)
            assert len(related) <= limit


def test_large_limit_returns_every_other_item_once(scenario_items):
    related = related_to(scenario_items, "C", limit=len(scenario_items) - 1)

    assert sorted(_ids(related)) == ["A", "B", "D", "E"]
    assert len(set(_ids(related))) == 4


def test_empty_collection_gives_empty_result():
    assert related_to([], "A", limit=4) == []


@pytest.mark.parametrize("limit", [0, -3])
def test_limit_must_be_positive(scenario_items, limit):
    with pytest.raises(InvalidArgument):
        related_to(scenario_items, "A", limit=limit)
