"""
Unit tests for the Order entity and the order status machine

Test Focus:
1. total_amount is fixed at creation from the reserved unit price
2. Only the listed transitions are legal, each for exactly one actor
3. Terminal statuses refuse every further transition
"""

from collections.abc import Callable
from decimal import Decimal

import pytest
from uuid_utils import uuid7

from src.platform.exception.exceptions import InvalidQuantityError, InvalidTransitionError
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus, PaymentStatus
from src.service.marketplace.domain.order_state_machine import (
    TERMINAL_STATUSES,
    TRANSITIONS,
    OrderActor,
    can_transition,
)
from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress


@pytest.mark.unit
class TestOrderCreation:
    def test_total_is_quantity_times_unit_price(self, delivery_address: DeliveryAddress) -> None:
        order = Order.create(
            buyer_id=2,
            farmer_id=1,
            product_id=uuid7(),
            quantity=30,
            unit_price=Decimal('10.50'),
            delivery_address=delivery_address,
        )

        assert order.total_amount == Decimal('315.00')
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.delivered_at is None

    def test_fractional_quantity_is_refused(self, delivery_address: DeliveryAddress) -> None:
        with pytest.raises(InvalidQuantityError):
            Order.create(
                buyer_id=2,
                farmer_id=1,
                product_id=uuid7(),
                quantity=1.5,  # type: ignore[arg-type]
                unit_price=Decimal('10'),
                delivery_address=delivery_address,
            )

    def test_involves_buyer_and_farmer_only(self, make_order: Callable[..., Order]) -> None:
        order = make_order(buyer_id=2, farmer_id=1)

        assert order.involves(1)
        assert order.involves(2)
        assert not order.involves(3)


@pytest.mark.unit
class TestOrderTransitions:
    def test_farmer_accepts_then_delivers(self, make_order: Callable[..., Order]) -> None:
        # Arrange
        order = make_order()

        # Act
        accepted = order.transition_to(OrderStatus.ACCEPTED, actor=OrderActor.FARMER)
        delivered = accepted.transition_to(OrderStatus.DELIVERED, actor=OrderActor.FARMER)

        # Assert
        assert accepted.status == OrderStatus.ACCEPTED
        assert delivered.status == OrderStatus.DELIVERED
        assert delivered.payment_status == PaymentStatus.COMPLETED
        assert delivered.delivered_at is not None
        assert delivered.total_amount == order.total_amount

    def test_farmer_can_reject_accepted_order(self, make_order: Callable[..., Order]) -> None:
        accepted = make_order(status=OrderStatus.ACCEPTED)

        rejected = accepted.transition_to(OrderStatus.REJECTED, actor=OrderActor.FARMER)

        assert rejected.status == OrderStatus.REJECTED

    def test_buyer_cancels_pending_order(self, make_order: Callable[..., Order]) -> None:
        cancelled = make_order().cancel()

        assert cancelled.status == OrderStatus.CANCELLED

    @pytest.mark.parametrize(
        'status', [OrderStatus.ACCEPTED, OrderStatus.REJECTED, OrderStatus.DELIVERED]
    )
    def test_cancel_of_non_pending_order_is_refused(
        self, make_order: Callable[..., Order], status: OrderStatus
    ) -> None:
        order = make_order(status=status)

        with pytest.raises(InvalidTransitionError):
            order.cancel()

    def test_cancel_twice_reports_already_cancelled(self, make_order: Callable[..., Order]) -> None:
        cancelled = make_order().cancel()

        with pytest.raises(InvalidTransitionError, match='Order is already cancelled'):
            cancelled.cancel()

    def test_pending_cannot_jump_to_delivered(self, make_order: Callable[..., Order]) -> None:
        with pytest.raises(
            InvalidTransitionError, match='Cannot change order status from pending to delivered'
        ):
            make_order().transition_to(OrderStatus.DELIVERED, actor=OrderActor.FARMER)

    def test_farmer_cannot_cancel(self, make_order: Callable[..., Order]) -> None:
        with pytest.raises(InvalidTransitionError):
            make_order().transition_to(OrderStatus.CANCELLED, actor=OrderActor.FARMER)

    def test_buyer_cannot_accept(self, make_order: Callable[..., Order]) -> None:
        with pytest.raises(InvalidTransitionError):
            make_order().transition_to(OrderStatus.ACCEPTED, actor=OrderActor.BUYER)

    def test_terminal_statuses_have_no_outgoing_transitions(self) -> None:
        for status in TERMINAL_STATUSES:
            for target in OrderStatus:
                for actor in OrderActor:
                    assert not can_transition(current=status, target=target, actor=actor)

    def test_every_transition_has_exactly_one_actor(self) -> None:
        for (current, target), actor in TRANSITIONS.items():
            other = OrderActor.BUYER if actor == OrderActor.FARMER else OrderActor.FARMER
            assert can_transition(current=current, target=target, actor=actor)
            assert not can_transition(current=current, target=target, actor=other)
