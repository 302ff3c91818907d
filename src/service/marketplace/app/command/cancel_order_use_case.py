from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, UnauthorizedError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_inventory_ledger import IInventoryLedger
from src.service.marketplace.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.marketplace.app.service.order_stock_release import release_then_persist
from src.service.marketplace.domain.entity.order_entity import Order


class CancelOrderUseCase:
    """
    Buyer cancels a pending order and its quantity returns to the product.

    Checks run in order: order exists, caller is the order's buyer, order is
    still pending. Stock is released before the status write; a failed
    release leaves the order pending.
    """

    def __init__(
        self,
        *,
        order_command_repo: IOrderCommandRepo,
        inventory_ledger: IInventoryLedger,
    ) -> None:
        self.order_command_repo = order_command_repo
        self.inventory_ledger = inventory_ledger

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        inventory_ledger: IInventoryLedger = Depends(Provide[Container.inventory_ledger]),
    ) -> Self:
        return cls(order_command_repo=order_command_repo, inventory_ledger=inventory_ledger)

    @Logger.io
    async def execute(self, *, order_id: UUID, actor_id: int) -> Order:
        order = await self.order_command_repo.get_by_id(order_id=order_id)
        if not order:
            raise NotFoundError('Order not found')

        if not order.is_buyer(actor_id):
            raise UnauthorizedError('Not authorized to cancel this order')

        # Raises InvalidTransitionError unless pending
        cancelled = order.cancel()

        stored = await release_then_persist(
            order_command_repo=self.order_command_repo,
            inventory_ledger=self.inventory_ledger,
            current=order,
            updated=cancelled,
        )
        metrics.record_order_transition(from_status=order.status, to_status=stored.status)
        Logger.base.info(
            f'🚫 [CANCEL-ORDER] order={order_id} released {order.quantity} of product {order.product_id}'
        )
        return stored
