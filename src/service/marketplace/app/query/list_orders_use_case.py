from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.dto.order_query import OrderQuery
from src.service.marketplace.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus


class ListOrdersUseCase:
    def __init__(self, *, order_query_repo: IOrderQueryRepo) -> None:
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @staticmethod
    def _statuses(status: Optional[OrderStatus]) -> Optional[set[OrderStatus]]:
        return {status} if status else None

    @Logger.io
    async def list_buyer_orders(
        self, *, buyer_id: int, status: Optional[OrderStatus] = None
    ) -> List[Order]:
        return await self.order_query_repo.query_orders(
            criteria=OrderQuery(buyer_id=buyer_id, statuses=self._statuses(status))
        )

    @Logger.io
    async def list_farmer_orders(
        self, *, farmer_id: int, status: Optional[OrderStatus] = None
    ) -> List[Order]:
        return await self.order_query_repo.query_orders(
            criteria=OrderQuery(farmer_id=farmer_id, statuses=self._statuses(status))
        )
