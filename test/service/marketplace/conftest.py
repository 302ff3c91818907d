from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import attrs
import pytest
from uuid_utils import uuid7

from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.entity.product_entity import (
    Product,
    ProductCategory,
    ProductUnit,
)
from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress
from test.service.marketplace.in_memory_marketplace import InMemoryMarketplace
from test.util_constant import DEFAULT_DELIVERY_ADDRESS, TEST_BUYER_ID, TEST_FARMER_ID


@pytest.fixture
def delivery_address() -> DeliveryAddress:
    return DeliveryAddress(**DEFAULT_DELIVERY_ADDRESS)


@pytest.fixture
def make_product() -> Callable[..., Product]:
    def _make(**overrides: Any) -> Product:
        product = Product.create(
            owner_id=overrides.pop('owner_id', TEST_FARMER_ID),
            name='Tomatoes',
            description='Fresh red tomatoes',
            category=ProductCategory.VEGETABLES,
            unit=ProductUnit.KG,
            price=overrides.pop('price', Decimal('10')),
            available_quantity=overrides.pop('available_quantity', 100),
        )
        return attrs.evolve(product, **overrides) if overrides else product

    return _make


@pytest.fixture
def make_order(delivery_address: DeliveryAddress) -> Callable[..., Order]:
    def _make(**overrides: Any) -> Order:
        order = Order.create(
            buyer_id=overrides.pop('buyer_id', TEST_BUYER_ID),
            farmer_id=overrides.pop('farmer_id', TEST_FARMER_ID),
            product_id=overrides.pop('product_id', uuid7()),
            quantity=overrides.pop('quantity', 5),
            unit_price=overrides.pop('unit_price', Decimal('10')),
            delivery_address=delivery_address,
        )
        return attrs.evolve(order, **overrides) if overrides else order

    return _make


@pytest.fixture
def order_at() -> Callable[[Order, int], Order]:
    """Shift an order's created_at by whole minutes (ordering tests)"""

    def _shift(order: Order, minutes: int) -> Order:
        created = datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)
        return attrs.evolve(order, created_at=created, updated_at=created)

    return _shift


@pytest.fixture
def marketplace() -> InMemoryMarketplace:
    return InMemoryMarketplace.build()
