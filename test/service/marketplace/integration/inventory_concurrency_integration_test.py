"""
Concurrency tests for the inventory ledger and order cancellation

Runs many coroutines against the in-memory adapters on one event loop. The
adapters yield before every check-and-set, so reads and conditional writes
of different tasks interleave the way they would against PostgreSQL.
"""

from collections.abc import Awaitable, Callable
from typing import Any

import anyio
import pytest

from src.platform.exception.exceptions import (
    CustomBaseError,
    InsufficientStockError,
    InvalidTransitionError,
)
from src.service.marketplace.app.command.cancel_order_use_case import CancelOrderUseCase
from src.service.marketplace.app.command.create_order_use_case import CreateOrderUseCase
from src.service.marketplace.app.command.update_order_status_use_case import (
    UpdateOrderStatusUseCase,
)
from src.service.marketplace.app.query.get_product_use_case import GetProductUseCase
from src.service.marketplace.domain.entity.product_entity import Product, ProductStatus
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress
from test.service.marketplace.in_memory_marketplace import InMemoryMarketplace


async def _run_concurrently(calls: list[Callable[[], Awaitable[Any]]]) -> list[Any]:
    """Run calls in one task group; each slot holds the result or the raised domain error"""
    outcomes: list[Any] = [None] * len(calls)

    async def _run(index: int, call: Callable[[], Awaitable[Any]]) -> None:
        try:
            outcomes[index] = await call()
        except CustomBaseError as e:
            outcomes[index] = e

    async with anyio.create_task_group() as tg:
        for index, call in enumerate(calls):
            tg.start_soon(_run, index, call)
    return outcomes


@pytest.mark.integration
class TestConcurrentReserve:
    @pytest.mark.asyncio
    async def test_two_reserves_of_six_against_ten(
        self, marketplace: InMemoryMarketplace, make_product: Callable[..., Product]
    ) -> None:
        """
        Given: product with stock 10
        When: two reserves of 6 run concurrently
        Then: exactly one succeeds, the other gets InsufficientStock, final stock 4
        """
        # Arrange
        product = await marketplace.product_command_repo.create(
            product=make_product(available_quantity=10)
        )
        ledger = marketplace.inventory_ledger

        # Act
        outcomes = await _run_concurrently(
            [
                lambda: ledger.reserve(product_id=product.id, amount=6),
                lambda: ledger.reserve(product_id=product.id, amount=6),
            ]
        )

        # Assert
        errors = [o for o in outcomes if isinstance(o, CustomBaseError)]
        assert len(errors) == 1
        assert isinstance(errors[0], InsufficientStockError)
        stored = await marketplace.product_command_repo.get_by_id(product_id=product.id)
        assert stored is not None
        assert stored.available_quantity == 4

    @pytest.mark.asyncio
    async def test_many_small_reserves_never_oversell(
        self, make_product: Callable[..., Product]
    ) -> None:
        """
        Given: product with stock 50
        When: 80 reserves of 1 run concurrently
        Then: exactly 50 succeed, 30 get InsufficientStock, stock ends at 0 and sold
        """
        marketplace = InMemoryMarketplace.build(max_retries=1000)
        product = await marketplace.product_command_repo.create(
            product=make_product(available_quantity=50)
        )
        ledger = marketplace.inventory_ledger

        outcomes = await _run_concurrently(
            [lambda: ledger.reserve(product_id=product.id, amount=1) for _ in range(80)]
        )

        successes = [o for o in outcomes if not isinstance(o, CustomBaseError)]
        failures = [o for o in outcomes if isinstance(o, InsufficientStockError)]
        assert len(successes) == 50
        assert len(failures) == 30
        stored = await marketplace.product_command_repo.get_by_id(product_id=product.id)
        assert stored is not None
        assert stored.available_quantity == 0
        assert stored.status == ProductStatus.SOLD

    @pytest.mark.asyncio
    async def test_mixed_reserve_and_release_balance_out(
        self, make_product: Callable[..., Product]
    ) -> None:
        marketplace = InMemoryMarketplace.build(max_retries=1000)
        product = await marketplace.product_command_repo.create(
            product=make_product(available_quantity=20)
        )
        ledger = marketplace.inventory_ledger

        calls: list[Callable[[], Awaitable[Any]]] = []
        for _ in range(10):
            calls.append(lambda: ledger.reserve(product_id=product.id, amount=2))
            calls.append(lambda: ledger.release(product_id=product.id, amount=2))
        outcomes = await _run_concurrently(calls)

        assert not [o for o in outcomes if isinstance(o, CustomBaseError)]
        stored = await marketplace.product_command_repo.get_by_id(product_id=product.id)
        assert stored is not None
        assert stored.available_quantity == 20
        # one version bump per successful operation
        assert stored.version == product.version + 20


@pytest.mark.integration
class TestConcurrentOrderTransitions:
    @pytest.mark.asyncio
    async def test_double_cancel_releases_stock_once(
        self,
        marketplace: InMemoryMarketplace,
        make_product: Callable[..., Product],
        delivery_address: DeliveryAddress,
    ) -> None:
        """
        Given: stock 10 and a pending order of 4 (stock 6)
        When: the buyer sends cancel twice at the same time
        Then: one cancel succeeds, the other gets InvalidTransition, stock is 10
        """
        # Arrange
        product = await marketplace.product_command_repo.create(
            product=make_product(available_quantity=10)
        )
        order = await CreateOrderUseCase(
            order_command_repo=marketplace.order_command_repo,
            inventory_ledger=marketplace.inventory_ledger,
        ).execute(
            buyer_id=2, product_id=product.id, quantity=4, delivery_address=delivery_address
        )
        cancel = CancelOrderUseCase(
            order_command_repo=marketplace.order_command_repo,
            inventory_ledger=marketplace.inventory_ledger,
        )

        # Act
        outcomes = await _run_concurrently(
            [
                lambda: cancel.execute(order_id=order.id, actor_id=2),
                lambda: cancel.execute(order_id=order.id, actor_id=2),
            ]
        )

        # Assert
        errors = [o for o in outcomes if isinstance(o, CustomBaseError)]
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidTransitionError)
        stored = await marketplace.product_command_repo.get_by_id(product_id=product.id)
        assert stored is not None
        assert stored.available_quantity == 10

    @pytest.mark.asyncio
    async def test_accept_racing_cancel_has_one_winner(
        self,
        marketplace: InMemoryMarketplace,
        make_product: Callable[..., Product],
        delivery_address: DeliveryAddress,
    ) -> None:
        """
        Given: a pending order of 4 against stock 10
        When: the farmer accepts while the buyer cancels
        Then: exactly one wins; stock is 10 if the cancel won, 6 if the accept won
        """
        product = await marketplace.product_command_repo.create(
            product=make_product(owner_id=1, available_quantity=10)
        )
        order = await CreateOrderUseCase(
            order_command_repo=marketplace.order_command_repo,
            inventory_ledger=marketplace.inventory_ledger,
        ).execute(
            buyer_id=2, product_id=product.id, quantity=4, delivery_address=delivery_address
        )
        cancel = CancelOrderUseCase(
            order_command_repo=marketplace.order_command_repo,
            inventory_ledger=marketplace.inventory_ledger,
        )
        update_status = UpdateOrderStatusUseCase(
            order_command_repo=marketplace.order_command_repo,
            inventory_ledger=marketplace.inventory_ledger,
        )

        outcomes = await _run_concurrently(
            [
                lambda: cancel.execute(order_id=order.id, actor_id=2),
                lambda: update_status.execute(
                    order_id=order.id, actor_id=1, new_status=OrderStatus.ACCEPTED
                ),
            ]
        )

        assert len([o for o in outcomes if isinstance(o, InvalidTransitionError)]) == 1
        stored_order = await marketplace.order_command_repo.get_by_id(order_id=order.id)
        stored_product = await marketplace.product_command_repo.get_by_id(product_id=product.id)
        assert stored_order is not None
        assert stored_product is not None
        if stored_order.status == OrderStatus.CANCELLED:
            assert stored_product.available_quantity == 10
        else:
            assert stored_order.status == OrderStatus.ACCEPTED
            assert stored_product.available_quantity == 6


@pytest.mark.integration
class TestViewsDuringReserve:
    @pytest.mark.asyncio
    async def test_views_never_make_a_reserve_retry(
        self, make_product: Callable[..., Product]
    ) -> None:
        """
        Given: ledger allowed a single attempt per operation, stock 10
        When: one reserve of 3 runs alongside 20 detail-page views
        Then: the reserve wins on its first attempt, all 20 views are kept, and
              version moves only for the reserve
        """
        # Arrange
        marketplace = InMemoryMarketplace.build(max_retries=1)
        product = await marketplace.product_command_repo.create(
            product=make_product(available_quantity=10)
        )
        get_product = GetProductUseCase(product_command_repo=marketplace.product_command_repo)

        # Act
        outcomes = await _run_concurrently(
            [lambda: marketplace.inventory_ledger.reserve(product_id=product.id, amount=3)]
            + [lambda: get_product.execute(product_id=product.id) for _ in range(20)]
        )

        # Assert
        assert not [o for o in outcomes if isinstance(o, CustomBaseError)]
        stored = await marketplace.product_command_repo.get_by_id(product_id=product.id)
        assert stored is not None
        assert stored.available_quantity == 7
        assert stored.views == 20
        assert stored.version == product.version + 1
