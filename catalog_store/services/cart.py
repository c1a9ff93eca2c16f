"""
Shopping cart. All users share the ``cart`` collection; every line carries
its owner's user id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from catalog_store.contracts.records import CartItem, CatalogItem, Color
from catalog_store.database.collections import CART
from catalog_store.errors import InvalidArgument
from catalog_store.services.base import CollectionService, new_id

logger = logging.getLogger(__name__)


@dataclass
class CartSummary:
    items: List[CartItem] = field(default_factory=list)
    item_count: int = 0
    subtotal: Decimal = Decimal("0")


def _color_name(color: Optional[Color]) -> Optional[str]:
    return color.name if color is not None else None


class CartService(CollectionService):
    async def get_cart(self, user_id: str) -> List[CartItem]:
        cart = await self._load(CART)
        return [line for line in cart if line.user_id == user_id]

    async def add_to_cart(
        self,
        user_id: str,
        product: CatalogItem,
        quantity: int = 1,
        selected_size: Optional[str] = None,
        selected_color: Optional[Color] = None,
    ) -> CartItem:
        """
        Add a product to the user's cart. A line for the same product, size
        and color is topped up; anything else becomes a new line.
        """
        if quantity < 1:
            raise InvalidArgument(f"quantity must be >= 1, got {quantity!r}")

        cart = await self._load(CART)
        for line in cart:
            if (
                line.user_id == user_id
                and line.product.id == product.id
                and line.selected_size == selected_size
                and _color_name(line.selected_color) == _color_name(selected_color)
            ):
                line.quantity += quantity
                await self._save(CART, cart)
                return line

        line = CartItem(
            id=new_id(),
            user_id=user_id,
            product=product,
            quantity=quantity,
            selected_size=selected_size,
            selected_color=selected_color,
            price=product.price,
        )
        cart.append(line)
        await self._save(CART, cart)
        logger.debug("Added %s x%d to cart of %s", product.id, quantity, user_id)
        return line

    async def update_quantity(self, item_id: str, quantity: int) -> Optional[CartItem]:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            await self.remove(item_id)
            return None

        cart = await self._load(CART)
        for line in cart:
            if line.id == item_id:
                line.quantity = quantity
                await self._save(CART, cart)
                return line
        return None

    async def remove(self, item_id: str) -> bool:
        return await self._remove(CART, item_id)

    async def clear(self, user_id: str) -> int:
        """Drop every line owned by ``user_id``; other users' lines stay."""
        cart = await self._load(CART)
        remaining = [line for line in cart if line.user_id != user_id]
        removed = len(cart) - len(remaining)
        if removed:
            await self._save(CART, remaining)
        return removed

    async def summary(self, user_id: str) -> CartSummary:
        lines = await self.get_cart(user_id)
        return CartSummary(
            items=lines,
            item_count=sum(line.quantity for line in lines),
            subtotal=sum((line.line_total for line in lines), Decimal("0")),
        )
