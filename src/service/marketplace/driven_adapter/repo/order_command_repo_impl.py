from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.driven_adapter.model.order_model import OrderModel
from src.service.marketplace.driven_adapter.repo.row_mapper import (
    order_to_entity,
    order_to_values,
    to_db_uuid,
)


class OrderCommandRepoImpl(IOrderCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def create(self, *, order: Order) -> Order:
        async with self._get_session() as session:
            db_order = OrderModel(**order_to_values(order))
            session.add(db_order)
            await session.flush()
            await session.refresh(db_order)
            return order_to_entity(db_order)

    @Logger.io
    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        async with self._get_session() as session:
            result = await session.execute(
                select(OrderModel).where(OrderModel.id == to_db_uuid(order_id))
            )
            db_order = result.scalar_one_or_none()
            return order_to_entity(db_order) if db_order else None

    @Logger.io
    async def update(self, *, order: Order, expected_status: OrderStatus) -> Optional[Order]:
        """Status-conditional write: ``UPDATE ... WHERE id = :id AND status = :expected``"""
        async with self._get_session() as session:
            result = await session.execute(
                update(OrderModel)
                .where(
                    OrderModel.id == to_db_uuid(order.id),
                    OrderModel.status == OrderStatus(expected_status).value,
                )
                .values(
                    status=order.status.value,
                    payment_status=order.payment_status.value,
                    notes=order.notes,
                    updated_at=order.updated_at,
                    delivered_at=order.delivered_at,
                )
                .returning(OrderModel)
                .execution_options(synchronize_session=False)
            )
            db_order = result.scalar_one_or_none()
            return order_to_entity(db_order) if db_order else None
