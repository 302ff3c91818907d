from opentelemetry import trace
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.dto.reservation import Reservation
from src.service.marketplace.app.interface.i_inventory_ledger import IInventoryLedger
from src.service.marketplace.app.service.product_atomic_updater import ProductAtomicUpdater
from src.service.marketplace.domain.entity.product_entity import Product, ensure_positive_quantity


class InventoryLedger(IInventoryLedger):
    """
    Stock bookkeeping on top of ProductAtomicUpdater.

    The availability check and the decrement happen inside one conditional
    write, so concurrent reserves can never oversell: with stock 10, reserves
    of 6 and 6 leave exactly one winner and stock 4.
    """

    def __init__(self, *, product_atomic_updater: ProductAtomicUpdater) -> None:
        self.product_atomic_updater = product_atomic_updater
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def reserve(self, *, product_id: UUID, amount: int) -> Reservation:
        ensure_positive_quantity(amount)
        with self.tracer.start_as_current_span(
            'ledger.reserve', attributes={'product.id': str(product_id), 'amount': amount}
        ):
            snapshot, stored = await self.product_atomic_updater.apply(
                product_id=product_id,
                mutation=lambda product: product.reserve(amount),
                operation='reserve',
            )

        Logger.base.info(
            f'📦 [RESERVE] product={product_id} -{amount} '
            f'({snapshot.available_quantity} -> {stored.available_quantity})'
        )
        return Reservation(
            product_id=stored.id,
            amount=amount,
            unit_price=snapshot.price,
            farmer_id=snapshot.owner_id,
            remaining_quantity=stored.available_quantity,
            product_status=stored.status,
        )

    @Logger.io
    async def release(self, *, product_id: UUID, amount: int) -> Product:
        ensure_positive_quantity(amount)
        with self.tracer.start_as_current_span(
            'ledger.release', attributes={'product.id': str(product_id), 'amount': amount}
        ):
            snapshot, stored = await self.product_atomic_updater.apply(
                product_id=product_id,
                mutation=lambda product: product.release(amount),
                operation='release',
            )

        Logger.base.info(
            f'📦 [RELEASE] product={product_id} +{amount} '
            f'({snapshot.available_quantity} -> {stored.available_quantity})'
        )
        return stored

    @Logger.io
    async def set_quantity(self, *, product_id: UUID, quantity: int) -> Product:
        _, stored = await self.product_atomic_updater.apply(
            product_id=product_id,
            mutation=lambda product: product.set_quantity(quantity),
            operation='set_quantity',
        )
        return stored
