"""
Unit tests for UpdateOrderStatusUseCase

Test Focus:
1. Only the order's farmer may move it; buyers get UnauthorizedError
2. Illegal transitions raise InvalidTransitionError
3. Rejection restocks only when restock_on_reject is enabled
"""

from collections.abc import Callable
from unittest.mock import AsyncMock, Mock

import pytest

from src.platform.exception.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
)
from src.service.marketplace.app.command.update_order_status_use_case import (
    UpdateOrderStatusUseCase,
)
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus, PaymentStatus


@pytest.mark.unit
class TestUpdateOrderStatus:
    @pytest.fixture
    def mock_order_repo(self) -> Mock:
        repo = AsyncMock()
        repo.update = AsyncMock(side_effect=lambda *, order, expected_status: order)
        return repo

    @pytest.fixture
    def mock_ledger(self) -> Mock:
        return AsyncMock()

    def _use_case(
        self, mock_order_repo: Mock, mock_ledger: Mock, *, restock_on_reject: bool = False
    ) -> UpdateOrderStatusUseCase:
        return UpdateOrderStatusUseCase(
            order_command_repo=mock_order_repo,
            inventory_ledger=mock_ledger,
            restock_on_reject=restock_on_reject,
        )

    @pytest.mark.asyncio
    async def test_farmer_accepts_pending_order(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        # Arrange
        order = make_order(farmer_id=1)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)

        # Act
        result = await self._use_case(mock_order_repo, mock_ledger).execute(
            order_id=order.id, actor_id=1, new_status=OrderStatus.ACCEPTED
        )

        # Assert
        assert result.status == OrderStatus.ACCEPTED
        assert mock_order_repo.update.await_args.kwargs['expected_status'] == OrderStatus.PENDING
        mock_ledger.release.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deliver_completes_payment(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        order = make_order(farmer_id=1, status=OrderStatus.ACCEPTED)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)

        result = await self._use_case(mock_order_repo, mock_ledger).execute(
            order_id=order.id, actor_id=1, new_status=OrderStatus.DELIVERED
        )

        assert result.status == OrderStatus.DELIVERED
        assert result.payment_status == PaymentStatus.COMPLETED
        assert result.delivered_at is not None

    @pytest.mark.asyncio
    async def test_buyer_cannot_set_status(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        order = make_order(buyer_id=2, farmer_id=1)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)

        with pytest.raises(UnauthorizedError, match='Not authorized to update this order'):
            await self._use_case(mock_order_repo, mock_ledger).execute(
                order_id=order.id, actor_id=2, new_status=OrderStatus.ACCEPTED
            )

        mock_order_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_farmer_cannot_set_status(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        order = make_order(farmer_id=1)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)

        with pytest.raises(UnauthorizedError):
            await self._use_case(mock_order_repo, mock_ledger).execute(
                order_id=order.id, actor_id=4, new_status=OrderStatus.ACCEPTED
            )

    @pytest.mark.asyncio
    async def test_missing_order(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        mock_order_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await self._use_case(mock_order_repo, mock_ledger).execute(
                order_id=make_order().id, actor_id=1, new_status=OrderStatus.ACCEPTED
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ('current', 'target'),
        [
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.DELIVERED, OrderStatus.REJECTED),
            (OrderStatus.REJECTED, OrderStatus.ACCEPTED),
            (OrderStatus.CANCELLED, OrderStatus.ACCEPTED),
            (OrderStatus.ACCEPTED, OrderStatus.ACCEPTED),
        ],
    )
    async def test_illegal_transition(
        self,
        mock_order_repo: Mock,
        mock_ledger: Mock,
        make_order: Callable[..., Order],
        current: OrderStatus,
        target: OrderStatus,
    ) -> None:
        order = make_order(farmer_id=1, status=current)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)

        with pytest.raises(InvalidTransitionError):
            await self._use_case(mock_order_repo, mock_ledger).execute(
                order_id=order.id, actor_id=1, new_status=target
            )

        mock_order_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_change_surfaces_as_invalid_transition(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        order = make_order(farmer_id=1)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)
        mock_order_repo.update = AsyncMock(return_value=None)

        with pytest.raises(InvalidTransitionError, match='changed concurrently'):
            await self._use_case(mock_order_repo, mock_ledger).execute(
                order_id=order.id, actor_id=1, new_status=OrderStatus.ACCEPTED
            )

    @pytest.mark.asyncio
    async def test_reject_keeps_stock_reserved_by_default(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        order = make_order(farmer_id=1, quantity=6)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)

        result = await self._use_case(mock_order_repo, mock_ledger).execute(
            order_id=order.id, actor_id=1, new_status=OrderStatus.REJECTED
        )

        assert result.status == OrderStatus.REJECTED
        mock_ledger.release.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reject_restocks_when_enabled(
        self, mock_order_repo: Mock, mock_ledger: Mock, make_order: Callable[..., Order]
    ) -> None:
        """
        Given: restock_on_reject enabled and an accepted order of 6
        When: farmer rejects it
        Then: 6 released back to the product before the status write
        """
        order = make_order(farmer_id=1, quantity=6, status=OrderStatus.ACCEPTED)
        mock_order_repo.get_by_id = AsyncMock(return_value=order)

        result = await self._use_case(
            mock_order_repo, mock_ledger, restock_on_reject=True
        ).execute(order_id=order.id, actor_id=1, new_status=OrderStatus.REJECTED)

        assert result.status == OrderStatus.REJECTED
        mock_ledger.release.assert_awaited_once_with(product_id=order.product_id, amount=6)
        assert mock_order_repo.update.await_args.kwargs['expected_status'] == OrderStatus.ACCEPTED
