"""
Order status machine

    pending ──accept──▶ accepted ──deliver──▶ delivered
     │  │                 │
     │  └──reject──▶ rejected ◀──reject──┘
     └──cancel──▶ cancelled

Farmers drive accept / reject / deliver on orders for their products; only
the buyer who placed a pending order may cancel it. rejected, delivered and
cancelled are terminal.
"""

from enum import StrEnum

from src.platform.exception.exceptions import InvalidTransitionError
from src.service.marketplace.domain.enum.order_status import OrderStatus


class OrderActor(StrEnum):
    BUYER = 'buyer'
    FARMER = 'farmer'


TRANSITIONS: dict[tuple[OrderStatus, OrderStatus], OrderActor] = {
    (OrderStatus.PENDING, OrderStatus.ACCEPTED): OrderActor.FARMER,
    (OrderStatus.PENDING, OrderStatus.REJECTED): OrderActor.FARMER,
    (OrderStatus.ACCEPTED, OrderStatus.REJECTED): OrderActor.FARMER,
    (OrderStatus.ACCEPTED, OrderStatus.DELIVERED): OrderActor.FARMER,
    (OrderStatus.PENDING, OrderStatus.CANCELLED): OrderActor.BUYER,
}

TERMINAL_STATUSES = frozenset({OrderStatus.REJECTED, OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def can_transition(*, current: OrderStatus, target: OrderStatus, actor: OrderActor) -> bool:
    return TRANSITIONS.get((current, target)) == actor


def ensure_transition(*, current: OrderStatus, target: OrderStatus, actor: OrderActor) -> None:
    if can_transition(current=current, target=target, actor=actor):
        return
    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(f'Order is already {current}')
    raise InvalidTransitionError(f'Cannot change order status from {current} to {target}')
