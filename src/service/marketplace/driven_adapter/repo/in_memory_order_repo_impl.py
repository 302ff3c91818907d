from decimal import Decimal
from typing import List, Optional

import anyio
from uuid_utils import UUID

from src.service.marketplace.app.dto.order_query import OrderQuery
from src.service.marketplace.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.marketplace.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.driven_adapter.repo.in_memory_state import InMemoryMarketplaceState


def _matches(order: Order, criteria: OrderQuery) -> bool:
    if criteria.buyer_id is not None and order.buyer_id != criteria.buyer_id:
        return False
    if criteria.farmer_id is not None and order.farmer_id != criteria.farmer_id:
        return False
    if criteria.product_id is not None and str(order.product_id) != str(criteria.product_id):
        return False
    if criteria.statuses is not None and order.status not in criteria.statuses:
        return False
    return True


class InMemoryOrderCommandRepoImpl(IOrderCommandRepo):
    def __init__(self, *, state: InMemoryMarketplaceState):
        self.state = state

    async def create(self, *, order: Order) -> Order:
        await anyio.sleep(0)
        self.state.orders[self.state.key(order.id)] = order
        return order

    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        await anyio.sleep(0)
        return self.state.orders.get(self.state.key(order_id))

    async def update(self, *, order: Order, expected_status: OrderStatus) -> Optional[Order]:
        await anyio.sleep(0)
        key = self.state.key(order.id)
        current = self.state.orders.get(key)
        if current is None or current.status != expected_status:
            return None
        self.state.orders[key] = order
        return order


class InMemoryOrderQueryRepoImpl(IOrderQueryRepo):
    def __init__(self, *, state: InMemoryMarketplaceState):
        self.state = state

    def _select(self, criteria: OrderQuery) -> List[Order]:
        return [order for order in self.state.orders.values() if _matches(order, criteria)]

    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        await anyio.sleep(0)
        return self.state.orders.get(self.state.key(order_id))

    async def query_orders(self, *, criteria: OrderQuery) -> List[Order]:
        await anyio.sleep(0)
        orders = sorted(
            self._select(criteria),
            key=lambda order: (order.created_at, str(order.id)),
            reverse=True,
        )
        return orders if criteria.limit is None else orders[: criteria.limit]

    async def count_orders(self, *, criteria: OrderQuery) -> int:
        await anyio.sleep(0)
        return len(self._select(criteria))

    async def sum_total_amount(self, *, criteria: OrderQuery) -> Decimal:
        await anyio.sleep(0)
        return sum((order.total_amount for order in self._select(criteria)), Decimal('0'))
