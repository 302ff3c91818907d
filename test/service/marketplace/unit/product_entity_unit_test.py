"""
Unit tests for the Product entity

Test Focus:
1. reserve / release / set_quantity keep stock non-negative and bump version
2. status is derived from (available_quantity, is_active) on every mutation
3. Owner edits are limited to the editable fields
"""

from collections.abc import Callable
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import (
    DomainError,
    InsufficientStockError,
    InvalidQuantityError,
)
from src.service.marketplace.domain.entity.product_entity import (
    Product,
    ProductStatus,
    derive_product_status,
)


@pytest.mark.unit
class TestProductStock:
    def test_reserve_decrements_stock_and_bumps_version(
        self, make_product: Callable[..., Product]
    ) -> None:
        # Arrange
        product = make_product(available_quantity=10)

        # Act
        reserved = product.reserve(4)

        # Assert
        assert reserved.available_quantity == 6
        assert reserved.version == product.version + 1
        assert reserved.status == ProductStatus.ACTIVE
        assert product.available_quantity == 10  # original untouched

    def test_reserve_everything_marks_product_sold(
        self, make_product: Callable[..., Product]
    ) -> None:
        product = make_product(available_quantity=5)

        reserved = product.reserve(5)

        assert reserved.available_quantity == 0
        assert reserved.status == ProductStatus.SOLD

    def test_reserve_more_than_available_is_refused(
        self, make_product: Callable[..., Product]
    ) -> None:
        product = make_product(available_quantity=3)

        with pytest.raises(InsufficientStockError, match='requested 4, available 3'):
            product.reserve(4)

    @pytest.mark.parametrize('amount', [0, -1, 2.5, True, '3'])
    def test_reserve_rejects_non_positive_or_fractional_amount(
        self, make_product: Callable[..., Product], amount: object
    ) -> None:
        product = make_product(available_quantity=10)

        with pytest.raises(InvalidQuantityError):
            product.reserve(amount)  # type: ignore[arg-type]

    def test_release_restores_sold_product_to_active(
        self, make_product: Callable[..., Product]
    ) -> None:
        sold = make_product(available_quantity=4).reserve(4)

        released = sold.release(4)

        assert released.available_quantity == 4
        assert released.status == ProductStatus.ACTIVE

    def test_release_keeps_inactive_product_inactive(
        self, make_product: Callable[..., Product]
    ) -> None:
        inactive = make_product(available_quantity=0).update_details(is_active=False)

        released = inactive.release(3)

        assert released.available_quantity == 3
        assert released.status == ProductStatus.INACTIVE

    def test_set_quantity_zero_is_allowed_and_sells_out(
        self, make_product: Callable[..., Product]
    ) -> None:
        product = make_product(available_quantity=7)

        updated = product.set_quantity(0)

        assert updated.available_quantity == 0
        assert updated.status == ProductStatus.SOLD

    def test_set_quantity_negative_is_refused(self, make_product: Callable[..., Product]) -> None:
        with pytest.raises(InvalidQuantityError):
            make_product().set_quantity(-1)


@pytest.mark.unit
class TestProductDetails:
    def test_create_derives_sold_status_for_empty_stock(
        self, make_product: Callable[..., Product]
    ) -> None:
        product = make_product(available_quantity=0)

        assert product.status == ProductStatus.SOLD
        assert product.version == 1
        assert product.views == 0

    def test_update_details_changes_price_and_bumps_version(
        self, make_product: Callable[..., Product]
    ) -> None:
        product = make_product(price=Decimal('10'))

        updated = product.update_details(price=Decimal('12.50'), name='Cherry Tomatoes')

        assert updated.price == Decimal('12.50')
        assert updated.name == 'Cherry Tomatoes'
        assert updated.version == product.version + 1

    def test_update_details_refuses_stock_and_owner_fields(
        self, make_product: Callable[..., Product]
    ) -> None:
        product = make_product()

        with pytest.raises(DomainError, match='available_quantity, owner_id'):
            product.update_details(available_quantity=5, owner_id=9)

    def test_negative_price_is_refused(self, make_product: Callable[..., Product]) -> None:
        with pytest.raises(DomainError, match='Price must not be negative'):
            make_product().update_details(price=Decimal('-1'))

    @pytest.mark.parametrize(
        'changes',
        [
            {'price': None},
            {'price': 'abc'},
            {'price': Decimal('NaN')},
            {'is_active': None},
            {'is_organic': 'yes'},
            {'name': None},
            {'category': None},
            {'unit': 'bucket'},
        ],
    )
    def test_bad_detail_values_are_refused(
        self, make_product: Callable[..., Product], changes: dict
    ) -> None:
        product = make_product()

        with pytest.raises(DomainError):
            product.update_details(**changes)

    def test_record_view_leaves_stock_and_version_alone(
        self, make_product: Callable[..., Product]
    ) -> None:
        product = make_product(available_quantity=10)

        viewed = product.record_view().record_view()

        assert viewed.views == 2
        assert viewed.available_quantity == 10
        assert viewed.version == product.version

    @pytest.mark.parametrize(
        ('available_quantity', 'is_active', 'expected'),
        [
            (5, True, ProductStatus.ACTIVE),
            (0, True, ProductStatus.SOLD),
            (5, False, ProductStatus.INACTIVE),
            (0, False, ProductStatus.INACTIVE),
        ],
    )
    def test_derive_product_status(
        self, available_quantity: int, is_active: bool, expected: ProductStatus
    ) -> None:
        assert (
            derive_product_status(available_quantity=available_quantity, is_active=is_active)
            == expected
        )
