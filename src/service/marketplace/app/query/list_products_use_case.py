from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_product_query_repo import IProductQueryRepo
from src.service.marketplace.domain.entity.product_entity import Product


class ListProductsUseCase:
    def __init__(self, *, product_query_repo: IProductQueryRepo) -> None:
        self.product_query_repo = product_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        product_query_repo: IProductQueryRepo = Depends(Provide[Container.product_query_repo]),
    ) -> Self:
        return cls(product_query_repo=product_query_repo)

    @Logger.io
    async def list_active(self) -> List[Product]:
        return await self.product_query_repo.list_active()

    @Logger.io
    async def list_by_owner(self, *, owner_id: int) -> List[Product]:
        return await self.product_query_repo.list_by_owner(owner_id=owner_id)
