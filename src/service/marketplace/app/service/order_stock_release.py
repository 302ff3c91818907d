"""
Release-first persistence for transitions that hand stock back (cancel, and
reject when restocking is enabled).

The ledger release runs before the status write; if the release fails the
order is left untouched. The status write is conditional on the status the
caller read, so of two concurrent requests only one can move the order. The
loser re-reserves the quantity it released, which keeps release at most once
per order.
"""

from src.platform.exception.exceptions import CustomBaseError, InvalidTransitionError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_inventory_ledger import IInventoryLedger
from src.service.marketplace.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus


async def release_then_persist(
    *,
    order_command_repo: IOrderCommandRepo,
    inventory_ledger: IInventoryLedger,
    current: Order,
    updated: Order,
) -> Order:
    await inventory_ledger.release(product_id=current.product_id, amount=current.quantity)

    try:
        stored = await order_command_repo.update(order=updated, expected_status=current.status)
    except Exception:
        await _take_back_release(
            inventory_ledger=inventory_ledger, order=current, to_status=updated.status
        )
        raise

    if stored is None:
        Logger.base.warning(
            f'⚠️ [ORDER-{updated.status.upper()}] order={current.id} changed concurrently, '
            f'taking back released stock'
        )
        await _take_back_release(
            inventory_ledger=inventory_ledger, order=current, to_status=updated.status
        )
        raise InvalidTransitionError('Order status changed concurrently, please reload')

    return stored


async def _take_back_release(
    *, inventory_ledger: IInventoryLedger, order: Order, to_status: OrderStatus
) -> None:
    try:
        await inventory_ledger.reserve(product_id=order.product_id, amount=order.quantity)
    except CustomBaseError as e:
        # Stock was sold in between; the product now shows order.quantity too many
        metrics.record_take_back_failure(to_status=to_status)
        Logger.base.error(
            f'🚨 [ORDER-STOCK] could not take back {order.quantity} of product '
            f'{order.product_id} for order {order.id}: {e}'
        )
        raise InvalidTransitionError('Order status changed concurrently, please reload') from e
