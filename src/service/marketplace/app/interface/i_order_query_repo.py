from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from uuid_utils import UUID

from src.service.marketplace.app.dto.order_query import OrderQuery
from src.service.marketplace.domain.entity.order_entity import Order


class IOrderQueryRepo(ABC):
    """Repository interface for order read operations"""

    @abstractmethod
    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        pass

    @abstractmethod
    async def query_orders(self, *, criteria: OrderQuery) -> List[Order]:
        """Orders matching criteria, newest first, truncated to criteria.limit"""
        pass

    @abstractmethod
    async def count_orders(self, *, criteria: OrderQuery) -> int:
        pass

    @abstractmethod
    async def sum_total_amount(self, *, criteria: OrderQuery) -> Decimal:
        pass
