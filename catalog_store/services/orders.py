"""
Orders. One shared ``orders`` collection; lookups by id return None when the
order is unknown.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from catalog_store.contracts.records import Address, CartItem, OrderRecord, OrderStatus, utcnow
from catalog_store.database.collections import ORDERS
from catalog_store.errors import InvalidArgument
from catalog_store.services.base import CollectionService, new_id

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, str]


class OrderService(CollectionService):
    async def create_order(
        self,
        user_id: str,
        items: Sequence[CartItem],
        *,
        tax: Amount = 0,
        shipping: Amount = 0,
        discount: Amount = 0,
        promo_code: Optional[str] = None,
        shipping_address: Optional[Address] = None,
        billing_address: Optional[Address] = None,
    ) -> OrderRecord:
        """
        Record a new order. Subtotal is the sum of the line totals;
        total = subtotal + tax + shipping - discount, never below zero.
        """
        if not items:
            raise InvalidArgument("An order needs at least one item")

        subtotal = sum((line.line_total for line in items), Decimal("0"))
        tax, shipping, discount = Decimal(str(tax)), Decimal(str(shipping)), Decimal(str(discount))
        total = max(subtotal + tax + shipping - discount, Decimal("0"))

        order = OrderRecord(
            id=new_id(),
            user_id=user_id,
            items=list(items),
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            discount=discount,
            total=total,
            promo_code=promo_code,
            shipping_address=shipping_address,
            billing_address=billing_address,
        )
        orders = await self._load(ORDERS)
        orders.append(order)
        await self._save(ORDERS, orders)
        logger.info("Created order %s for user %s (total=%s)", order.id, user_id, total)
        return order

    async def get_order(self, order_id: str) -> Optional[OrderRecord]:
        return await self._find(ORDERS, order_id)

    async def list_orders(self, user_id: str) -> List[OrderRecord]:
        orders = await self._load(ORDERS)
        return [o for o in orders if o.user_id == user_id]

    async def update_status(self, order_id: str, status: Union[OrderStatus, str]) -> Optional[OrderRecord]:
        status = OrderStatus(status)
        orders = await self._load(ORDERS)
        for i, order in enumerate(orders):
            if order.id == order_id:
                if order.status == status:
                    return order
                orders[i] = order.model_copy(update={"status": status, "updated_at": utcnow()})
                await self._save(ORDERS, orders)
                return orders[i]
        return None
