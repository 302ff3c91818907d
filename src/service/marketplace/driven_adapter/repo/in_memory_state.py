"""
Process-local store behind the ``memory`` storage backend.

Used for local runs without PostgreSQL and by the concurrency tests. Every
check-and-set below runs between two awaits, so on a single event loop it is
atomic the same way a conditional UPDATE is in the database.
"""

from typing import Dict

import attrs
from uuid_utils import UUID

from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.entity.product_entity import Product


@attrs.define
class InMemoryMarketplaceState:
    products: Dict[str, Product] = attrs.field(factory=dict)
    orders: Dict[str, Order] = attrs.field(factory=dict)

    @staticmethod
    def key(entity_id: UUID) -> str:
        return str(entity_id)

    def reset(self) -> None:
        self.products.clear()
        self.orders.clear()
