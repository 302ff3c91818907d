from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_inventory_ledger import IInventoryLedger
from src.service.marketplace.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.marketplace.app.service.order_stock_release import release_then_persist
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.domain.order_state_machine import OrderActor


class UpdateOrderStatusUseCase:
    """
    Farmer moves an order for one of their products: accept, reject or deliver.

    Checks run in order: order exists, caller is the order's farmer, the
    transition is legal. Rejection hands the quantity back to the product only
    when ``restock_on_reject`` is enabled; by default a rejected order keeps
    its reservation out of stock.
    """

    def __init__(
        self,
        *,
        order_command_repo: IOrderCommandRepo,
        inventory_ledger: IInventoryLedger,
        restock_on_reject: bool = False,
    ) -> None:
        self.order_command_repo = order_command_repo
        self.inventory_ledger = inventory_ledger
        self.restock_on_reject = restock_on_reject

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        inventory_ledger: IInventoryLedger = Depends(Provide[Container.inventory_ledger]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            order_command_repo=order_command_repo,
            inventory_ledger=inventory_ledger,
            restock_on_reject=config.RESTOCK_ON_REJECT,
        )

    @Logger.io
    async def execute(self, *, order_id: UUID, actor_id: int, new_status: OrderStatus) -> Order:
        order = await self.order_command_repo.get_by_id(order_id=order_id)
        if not order:
            raise NotFoundError('Order not found')

        if not order.is_farmer(actor_id):
            raise UnauthorizedError('Not authorized to update this order')

        updated = order.transition_to(OrderStatus(new_status), actor=OrderActor.FARMER)

        if updated.status == OrderStatus.REJECTED and self.restock_on_reject:
            stored = await release_then_persist(
                order_command_repo=self.order_command_repo,
                inventory_ledger=self.inventory_ledger,
                current=order,
                updated=updated,
            )
        else:
            stored = await self.order_command_repo.update(
                order=updated, expected_status=order.status
            )
            if stored is None:
                raise InvalidTransitionError('Order status changed concurrently, please reload')

        metrics.record_order_transition(from_status=order.status, to_status=stored.status)
        Logger.base.info(f'🔄 [ORDER-STATUS] order={order_id} {order.status} -> {stored.status}')
        return stored
