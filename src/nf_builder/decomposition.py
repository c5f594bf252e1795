"""Second normal form decomposition of order details.

A flat OrderDetails relation keyed on (order_id, item) carries customer_name,
which depends on order_id alone. decompose() moves it into Orders and keeps
the rest in OrderItems; reconstruct() joins them back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)


class DecompositionError(ValueError):
    """Raised when the rows violate a key or the order_id -> customer_name dependency."""


@dataclass(frozen=True)
class OrderDetail:
    order_id: Any
    customer_name: str
    item: str
    quantity: int


@dataclass(frozen=True)
class Order:
    order_id: Any
    customer_name: str


@dataclass(frozen=True)
class OrderItem:
    order_id: Any
    item: str
    quantity: int


def decompose(
    details: Iterable[OrderDetail],
) -> Tuple[List[Order], List[OrderItem]]:
    orders: Dict[Any, Order] = {}
    items: List[OrderItem] = []
    seen_keys = set()
    for d in details:
        existing = orders.get(d.order_id)
        if existing is None:
            orders[d.order_id] = Order(d.order_id, d.customer_name)
        elif existing.customer_name != d.customer_name:
            raise DecompositionError(
                f"order {d.order_id!r} has customer names "
                f"{existing.customer_name!r} and {d.customer_name!r}"
            )
        key = (d.order_id, d.item)
        if key in seen_keys:
            raise DecompositionError(
                f"duplicate key (order_id={d.order_id!r}, item={d.item!r})"
            )
        seen_keys.add(key)
        items.append(OrderItem(d.order_id, d.item, d.quantity))
    logger.debug("Decomposed %d rows into %d orders", len(items), len(orders))
    return list(orders.values()), items


def reconstruct(
    orders: Iterable[Order], order_items: Iterable[OrderItem]
) -> List[OrderDetail]:
    lookup = {o.order_id: o for o in orders}
    rows: List[OrderDetail] = []
    for oi in order_items:
        order = lookup.get(oi.order_id)
        if order is None:
            raise DecompositionError(
                f"order item {oi.item!r} references missing order {oi.order_id!r}"
            )
        rows.append(OrderDetail(oi.order_id, order.customer_name, oi.item, oi.quantity))
    return rows
