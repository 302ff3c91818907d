from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_inventory_ledger import IInventoryLedger
from src.service.marketplace.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.entity.product_entity import ensure_positive_quantity
from src.service.marketplace.domain.enum.order_status import PaymentMethod
from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress


class CreateOrderUseCase:
    """
    Place an order against a product's stock.

    Flow:
    1. Validate quantity (integer >= 1) before touching stock
    2. Reserve stock through the inventory ledger (atomic check-and-decrement)
    3. Build a pending order from the reservation's price / owner snapshot
    4. Persist the order; if that fails, release the reservation and re-raise
    """

    def __init__(
        self,
        *,
        order_command_repo: IOrderCommandRepo,
        inventory_ledger: IInventoryLedger,
    ) -> None:
        self.order_command_repo = order_command_repo
        self.inventory_ledger = inventory_ledger
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        order_command_repo: IOrderCommandRepo = Depends(Provide[Container.order_command_repo]),
        inventory_ledger: IInventoryLedger = Depends(Provide[Container.inventory_ledger]),
    ) -> Self:
        return cls(order_command_repo=order_command_repo, inventory_ledger=inventory_ledger)

    @Logger.io
    async def execute(
        self,
        *,
        buyer_id: int,
        product_id: UUID,
        quantity: int,
        delivery_address: DeliveryAddress,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        notes: Optional[str] = None,
    ) -> Order:
        quantity = ensure_positive_quantity(quantity)

        with self.tracer.start_as_current_span(
            'use_case.create_order',
            attributes={'product.id': str(product_id), 'buyer.id': buyer_id, 'quantity': quantity},
        ):
            reservation = await self.inventory_ledger.reserve(product_id=product_id, amount=quantity)

            try:
                order = Order.create(
                    buyer_id=buyer_id,
                    farmer_id=reservation.farmer_id,
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=reservation.unit_price,
                    delivery_address=delivery_address,
                    payment_method=payment_method,
                    notes=notes,
                )
                created = await self.order_command_repo.create(order=order)
            except Exception:
                Logger.base.error(
                    f'↩️ [CREATE-ORDER] Persist failed, releasing {quantity} of product {product_id}'
                )
                await self.inventory_ledger.release(product_id=product_id, amount=quantity)
                raise

        Logger.base.info(
            f'📝 [CREATE-ORDER] order={created.id} buyer={buyer_id} product={product_id} '
            f'qty={quantity} total={created.total_amount}'
        )
        return created
