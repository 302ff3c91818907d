from datetime import date
from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.domain.entity.product_entity import (
    Product,
    ProductCategory,
    ProductUnit,
)


class CreateProductUseCase:
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
    async def execute(
        self,
        *,
        owner_id: int,
        name: str,
        description: str,
        category: ProductCategory,
        unit: ProductUnit,
        price: Decimal,
        available_quantity: int,
        is_organic: bool = False,
        harvest_date: Optional[date] = None,
    ) -> Product:
        product = Product.create(
            owner_id=owner_id,
            name=name,
            description=description,
            category=category,
            unit=unit,
            price=price,
            available_quantity=available_quantity,
            is_organic=is_organic,
            harvest_date=harvest_date,
        )
        created = await self.product_command_repo.create(product=product)
        Logger.base.info(
            f'🌱 [CREATE-PRODUCT] product={created.id} farmer={owner_id} '
            f'stock={created.available_quantity} price={created.price}'
        )
        return created
