from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, UnauthorizedError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.marketplace.domain.entity.order_entity import Order


class GetOrderUseCase:
    def __init__(self, *, order_query_repo: IOrderQueryRepo) -> None:
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(order_query_repo=order_query_repo)

    @Logger.io
    async def execute(self, *, order_id: UUID, actor_id: int) -> Order:
        """Only the buyer or the farmer on the order may read it."""
        order = await self.order_query_repo.get_by_id(order_id=order_id)
        if not order:
            raise NotFoundError('Order not found')

        if not order.involves(actor_id):
            raise UnauthorizedError('Not authorized to view this order')

        return order
