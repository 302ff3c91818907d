from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.dto.order_query import OrderQuery
from src.service.marketplace.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.driven_adapter.model.order_model import OrderModel
from src.service.marketplace.driven_adapter.repo.row_mapper import order_to_entity, to_db_uuid


def _apply_criteria(stmt: Select, criteria: OrderQuery) -> Select:
    if criteria.buyer_id is not None:
        stmt = stmt.where(OrderModel.buyer_id == criteria.buyer_id)
    if criteria.farmer_id is not None:
        stmt = stmt.where(OrderModel.farmer_id == criteria.farmer_id)
    if criteria.product_id is not None:
        stmt = stmt.where(OrderModel.product_id == to_db_uuid(criteria.product_id))
    if criteria.statuses is not None:
        stmt = stmt.where(OrderModel.status.in_([status.value for status in criteria.statuses]))
    return stmt


class OrderQueryRepoImpl(IOrderQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def get_by_id(self, *, order_id: UUID) -> Optional[Order]:
        async with self._get_session() as session:
            result = await session.execute(
                select(OrderModel).where(OrderModel.id == to_db_uuid(order_id))
            )
            db_order = result.scalar_one_or_none()
            return order_to_entity(db_order) if db_order else None

    @Logger.io
    async def query_orders(self, *, criteria: OrderQuery) -> List[Order]:
        # id is UUID7, so it breaks created_at ties in creation order
        stmt = _apply_criteria(select(OrderModel), criteria).order_by(
            OrderModel.created_at.desc(), OrderModel.id.desc()
        )
        if criteria.limit is not None:
            stmt = stmt.limit(criteria.limit)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [order_to_entity(db_order) for db_order in result.scalars().all()]

    @Logger.io
    async def count_orders(self, *, criteria: OrderQuery) -> int:
        stmt = _apply_criteria(select(func.count()).select_from(OrderModel), criteria)
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    @Logger.io
    async def sum_total_amount(self, *, criteria: OrderQuery) -> Decimal:
        stmt = _apply_criteria(
            select(func.coalesce(func.sum(OrderModel.total_amount), 0)).select_from(OrderModel),
            criteria,
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return Decimal(str(result.scalar_one()))
