from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, NotFoundError, UnauthorizedError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.dto.order_query import OrderQuery
from src.service.marketplace.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.domain.enum.order_status import OrderStatus


class DeleteProductUseCase:
    """
    Owner removes a listing.

    Refused while pending or accepted orders reference the product, since
    cancelling those must still be able to return stock to it.
    """

    def __init__(
        self,
        *,
        product_command_repo: IProductCommandRepo,
        order_query_repo: IOrderQueryRepo,
    ) -> None:
        self.product_command_repo = product_command_repo
        self.order_query_repo = order_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        product_command_repo: IProductCommandRepo = Depends(
            Provide[Container.product_command_repo]
        ),
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
    ) -> Self:
        return cls(product_command_repo=product_command_repo, order_query_repo=order_query_repo)

    @Logger.io
    async def execute(self, *, product_id: UUID, actor_id: int) -> None:
        product = await self.product_command_repo.get_by_id(product_id=product_id)
        if not product:
            raise NotFoundError('Product not found')

        if not product.is_owned_by(actor_id):
            raise UnauthorizedError('Not authorized to delete this product')

        open_orders = await self.order_query_repo.count_orders(
            criteria=OrderQuery(
                product_id=product_id, statuses={OrderStatus.PENDING, OrderStatus.ACCEPTED}
            )
        )
        if open_orders:
            raise ConflictError(f'Product has {open_orders} open order(s) and cannot be deleted')

        # A reserve landing after our read bumps the version and fails this delete
        if not await self.product_command_repo.delete(
            product_id=product_id, expected_version=product.version
        ):
            raise ConflictError('Product changed while deleting, please retry')

        Logger.base.info(f'🗑️ [DELETE-PRODUCT] product={product_id} farmer={actor_id}')
