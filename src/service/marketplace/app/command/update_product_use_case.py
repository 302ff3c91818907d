from typing import Any, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, UnauthorizedError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_inventory_ledger import IInventoryLedger
from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.app.service.product_atomic_updater import ProductAtomicUpdater
from src.service.marketplace.domain.entity.product_entity import Product


class UpdateProductUseCase:
    """
    Owner edits a listing.

    Detail edits (price included) are conditional writes like any stock
    change, so a reservation racing a price edit either sees the old price
    with the old stock or the new price with the new stock. Stock edits go
    through the inventory ledger.
    """

    def __init__(
        self,
        *,
        product_command_repo: IProductCommandRepo,
        product_atomic_updater: ProductAtomicUpdater,
        inventory_ledger: IInventoryLedger,
    ) -> None:
        self.product_command_repo = product_command_repo
        self.product_atomic_updater = product_atomic_updater
        self.inventory_ledger = inventory_ledger

    @classmethod
    @inject
    def depends(
        cls,
        product_command_repo: IProductCommandRepo = Depends(
            Provide[Container.product_command_repo]
        ),
        product_atomic_updater: ProductAtomicUpdater = Depends(
            Provide[Container.product_atomic_updater]
        ),
        inventory_ledger: IInventoryLedger = Depends(Provide[Container.inventory_ledger]),
    ) -> Self:
        return cls(
            product_command_repo=product_command_repo,
            product_atomic_updater=product_atomic_updater,
            inventory_ledger=inventory_ledger,
        )

    @Logger.io
    async def execute(
        self,
        *,
        product_id: UUID,
        actor_id: int,
        changes: dict[str, Any],
        available_quantity: Optional[int] = None,
    ) -> Product:
        product = await self.product_command_repo.get_by_id(product_id=product_id)
        if not product:
            raise NotFoundError('Product not found')

        if not product.is_owned_by(actor_id):
            raise UnauthorizedError('Not authorized to update this product')

        if changes:
            _, product = await self.product_atomic_updater.apply(
                product_id=product_id,
                mutation=lambda current: current.update_details(**changes),
                operation='update_details',
            )

        if available_quantity is not None:
            product = await self.inventory_ledger.set_quantity(
                product_id=product_id, quantity=available_quantity
            )

        Logger.base.info(
            f'✏️ [UPDATE-PRODUCT] product={product_id} fields={sorted(changes)} '
            f'stock={product.available_quantity} status={product.status}'
        )
        return product
