from decimal import Decimal

import pytest

from catalog_store.contracts.records import Color
from catalog_store.errors import InvalidArgument
from catalog_store.services.cart import CartService


@pytest.mark.asyncio
async def test_adding_same_product_twice_increments_quantity(store, item_factory):
    cart = CartService(store)
    product = item_factory("p1", price="12.50")

    first = await cart.add_to_cart("u1", product)
    second = await cart.add_to_cart("u1", product, quantity=2)

    lines = await cart.get_cart("u1")
    assert len(lines) == 1
    assert second.id == first.id
    assert lines[0].quantity == 3
    assert lines[0].price == Decimal("12.50")


@pytest.mark.asyncio
async def test_different_size_or_color_is_a_new_line(store, item_factory):
    cart = CartService(store)
    product = item_factory("p1")

    await cart.add_to_cart("u1", product, selected_size="S")
    await cart.add_to_cart("u1", product, selected_size="M")
    await cart.add_to_cart("u1", product, selected_size="M", selected_color=Color(name="Red", hex="#f00"))
    await cart.add_to_cart("u1", product, selected_size="M", selected_color=Color(name="Red", hex="#ff0000"))

    lines = await cart.get_cart("u1")
    assert [(line.selected_size, line.quantity) for line in lines] == [("S", 1), ("M", 1), ("M", 2)]
    assert len({line.id for line in lines}) == 3


@pytest.mark.asyncio
async def test_carts_are_per_user(store, item_factory):
    cart = CartService(store)
    product = item_factory("p1")

    await cart.add_to_cart("u1", product)
    await cart.add_to_cart("u2", product)

    assert len(await cart.get_cart("u1")) == 1
    assert len(await cart.get_cart("u2")) == 1


@pytest.mark.asyncio
async def test_add_rejects_non_positive_quantity(store, item_factory):
    with pytest.raises(InvalidArgument):
        await CartService(store).add_to_cart("u1", item_factory("p1"), quantity=0)


@pytest.mark.asyncio
async def test_update_quantity_and_zero_removes(store, item_factory):
    cart = CartService(store)
    line = await cart.add_to_cart("u1", item_factory("p1"))

    updated = await cart.update_quantity(line.id, 5)
    assert updated.quantity == 5
    assert (await cart.get_cart("u1"))[0].quantity == 5

    assert await cart.update_quantity(line.id, 0) is None
    assert await cart.get_cart("u1") == []


@pytest.mark.asyncio
async def test_update_unknown_line_is_a_no_op(store):
    assert await CartService(store).update_quantity("missing", 3) is None


@pytest.mark.asyncio
async def test_remove_twice_leaves_same_state(store, item_factory):
    cart = CartService(store)
    keep = await cart.add_to_cart("u1", item_factory("p1"))
    drop = await cart.add_to_cart("u1", item_factory("p2"))

    assert await cart.remove(drop.id) is True
    once = await store.get_raw("cart")
    assert await cart.remove(drop.id) is False
    twice = await store.get_raw("cart")

    assert once == twice
    assert [line.id for line in await cart.get_cart("u1")] == [keep.id]


@pytest.mark.asyncio
async def test_clear_only_touches_one_user(store, item_factory):
    cart = CartService(store)
    await cart.add_to_cart("u1", item_factory("p1"))
    await cart.add_to_cart("u1", item_factory("p2"))
    await cart.add_to_cart("u2", item_factory("p1"))

    assert await cart.clear("u1") == 2
    assert await cart.get_cart("u1") == []
    assert len(await cart.get_cart("u2")) == 1


@pytest.mark.asyncio
async def test_summary_totals(store, item_factory):
    cart = CartService(store)
    await cart.add_to_cart("u1", item_factory("p1", price="10.00"), quantity=2)
    await cart.add_to_cart("u1", item_factory("p2", price="2.50"))

    summary = await cart.summary("u1")

    assert summary.item_count == 3
    assert summary.subtotal == Decimal("22.50")
    assert len(summary.items) == 2
