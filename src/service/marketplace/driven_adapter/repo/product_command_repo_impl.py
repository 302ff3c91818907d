from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.domain.entity.product_entity import Product
from src.service.marketplace.driven_adapter.model.product_model import ProductModel
from src.service.marketplace.driven_adapter.repo.row_mapper import (
    product_to_entity,
    product_to_values,
    to_db_uuid,
)


class ProductCommandRepoImpl(IProductCommandRepo):
    """
    Product writes on PostgreSQL (SQLite in repository tests).

    compare_and_swap is a single ``UPDATE ... WHERE id = :id AND version = :v``;
    the database serialises concurrent writers on the row, so at most one of
    them matches.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def create(self, *, product: Product) -> Product:
        async with self._get_session() as session:
            db_product = ProductModel(**product_to_values(product))
            session.add(db_product)
            await session.flush()
            await session.refresh(db_product)
            return product_to_entity(db_product)

    @Logger.io
    async def get_by_id(self, *, product_id: UUID) -> Optional[Product]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ProductModel).where(ProductModel.id == to_db_uuid(product_id))
            )
            db_product = result.scalar_one_or_none()
            return product_to_entity(db_product) if db_product else None

    @Logger.io
    async def compare_and_swap(self, *, product: Product, expected_version: int) -> Optional[Product]:
        values = product_to_values(product)
        values.pop('id')
        values.pop('created_at')
        # views has its own increment; a stale snapshot must not overwrite it
        values.pop('views')

        async with self._get_session() as session:
            result = await session.execute(
                update(ProductModel)
                .where(
                    ProductModel.id == to_db_uuid(product.id),
                    ProductModel.version == expected_version,
                )
                .values(**values)
                .returning(ProductModel)
                .execution_options(synchronize_session=False)
            )
            db_product = result.scalar_one_or_none()
            return product_to_entity(db_product) if db_product else None

    @Logger.io
    async def increment_views(self, *, product_id: UUID) -> Optional[Product]:
        async with self._get_session() as session:
            result = await session.execute(
                update(ProductModel)
                .where(ProductModel.id == to_db_uuid(product_id))
                .values(views=ProductModel.views + 1)
                .returning(ProductModel)
                .execution_options(synchronize_session=False)
            )
            db_product = result.scalar_one_or_none()
            return product_to_entity(db_product) if db_product else None

    @Logger.io
    async def delete(self, *, product_id: UUID, expected_version: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                delete(ProductModel).where(
                    ProductModel.id == to_db_uuid(product_id),
                    ProductModel.version == expected_version,
                )
            )
            return result.rowcount == 1  # type: ignore[attr-defined]
