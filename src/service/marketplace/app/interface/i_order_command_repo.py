from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus


class IOrderCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, order: Order) -> Order:
        pass

    @abstractmethod
    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        pass

    @abstractmethod
    async def update(self, *, order: Order, expected_status: OrderStatus) -> Optional[Order]:
        """
        Persist ``order`` only if the stored status is still ``expected_status``.

        Returns:
            The stored order, or None when another writer moved it first
        """
        pass
