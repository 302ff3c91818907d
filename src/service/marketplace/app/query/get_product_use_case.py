from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.domain.entity.product_entity import Product


class GetProductUseCase:
    """
    Product detail page. Each read counts as a view; the counter is an atomic
    increment outside the version check, so views never contend with stock
    reservations on the same product.
    """

    def __init__(self, *, product_command_repo: IProductCommandRepo) -> None:
        self.product_command_repo = product_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        product_command_repo: IProductCommandRepo = Depends(
            Provide[Container.product_command_repo]
        ),
    ) -> Self:
        return cls(product_command_repo=product_command_repo)

    @Logger.io
    async def execute(self, *, product_id: UUID) -> Product:
        viewed = await self.product_command_repo.increment_views(product_id=product_id)
        if not viewed:
            raise NotFoundError('Product not found')
        return viewed
