from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import attrs
from uuid_utils import UUID, uuid7

from src.platform.exception.exceptions import InvalidQuantityError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.product_entity import (
    ensure_positive_quantity,
    is_whole_number,
)
from src.service.marketplace.domain.enum.order_status import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.marketplace.domain.order_state_machine import OrderActor, ensure_transition
from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress


def _validate_quantity(instance: 'Order', attribute: attrs.Attribute, value: int) -> None:
    if not is_whole_number(value) or value < 1:
        raise InvalidQuantityError(f'Quantity must be a positive integer, got {value!r}')


@attrs.define
class Order:
    id: UUID
    buyer_id: int
    farmer_id: int
    product_id: UUID
    quantity: int = attrs.field(validator=_validate_quantity)
    unit_price: Decimal = attrs.field(converter=Decimal)
    total_amount: Decimal = attrs.field(converter=Decimal)
    delivery_address: DeliveryAddress
    payment_method: PaymentMethod = attrs.field(default=PaymentMethod.CASH, converter=PaymentMethod)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        buyer_id: int,
        farmer_id: int,
        product_id: UUID,
        quantity: int,
        unit_price: Decimal,
        delivery_address: DeliveryAddress,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        notes: Optional[str] = None,
    ) -> 'Order':
        """
        Build a pending order from a price snapshot.

        total_amount is fixed here and never recomputed, later price edits on
        the product do not touch existing orders.
        """
        quantity = ensure_positive_quantity(quantity)
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            buyer_id=buyer_id,
            farmer_id=farmer_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            total_amount=Decimal(unit_price) * quantity,
            delivery_address=delivery_address,
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING,
            status=OrderStatus.PENDING,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    def is_buyer(self, user_id: int) -> bool:
        return self.buyer_id == user_id

    def is_farmer(self, user_id: int) -> bool:
        return self.farmer_id == user_id

    def involves(self, user_id: int) -> bool:
        return self.is_buyer(user_id) or self.is_farmer(user_id)

    @Logger.io
    def transition_to(self, target: OrderStatus, *, actor: OrderActor) -> 'Order':
        ensure_transition(current=self.status, target=target, actor=actor)

        now = datetime.now(timezone.utc)
        if target == OrderStatus.DELIVERED:
            return attrs.evolve(
                self,
                status=target,
                payment_status=PaymentStatus.COMPLETED,
                delivered_at=now,
                updated_at=now,
            )
        return attrs.evolve(self, status=target, updated_at=now)

    def cancel(self) -> 'Order':
        return self.transition_to(OrderStatus.CANCELLED, actor=OrderActor.BUYER)
