from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_product_query_repo import IProductQueryRepo
from src.service.marketplace.domain.entity.product_entity import Product, ProductStatus
from src.service.marketplace.driven_adapter.model.product_model import ProductModel
from src.service.marketplace.driven_adapter.repo.row_mapper import product_to_entity, to_db_uuid


class ProductQueryRepoImpl(IProductQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def get_by_id(self, *, product_id: UUID) -> Optional[Product]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ProductModel).where(ProductModel.id == to_db_uuid(product_id))
            )
            db_product = result.scalar_one_or_none()
            return product_to_entity(db_product) if db_product else None

    @Logger.io
    async def list_active(self) -> List[Product]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ProductModel)
                .where(ProductModel.status == ProductStatus.ACTIVE.value)
                .order_by(ProductModel.created_at.desc())
            )
            return [product_to_entity(db_product) for db_product in result.scalars().all()]

    @Logger.io
    async def list_by_owner(self, *, owner_id: int) -> List[Product]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ProductModel)
                .where(ProductModel.owner_id == owner_id)
                .order_by(ProductModel.created_at.desc())
            )
            return [product_to_entity(db_product) for db_product in result.scalars().all()]

    @Logger.io
    async def count_by_owner(self, *, owner_id: int, status: Optional[ProductStatus] = None) -> int:
        stmt = select(func.count()).select_from(ProductModel).where(ProductModel.owner_id == owner_id)
        if status is not None:
            stmt = stmt.where(ProductModel.status == ProductStatus(status).value)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()
