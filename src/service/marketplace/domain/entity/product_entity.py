from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Any, Optional

import attrs
from uuid_utils import UUID, uuid7

from src.platform.exception.exceptions import (
    DomainError,
    InsufficientStockError,
    InvalidQuantityError,
)
from src.platform.logging.loguru_io import Logger


class ProductStatus(StrEnum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    SOLD = 'sold'


class ProductCategory(StrEnum):
    VEGETABLES = 'Vegetables'
    FRUITS = 'Fruits'
    GRAINS = 'Grains'
    PULSES = 'Pulses'
    DAIRY = 'Dairy'
    POULTRY = 'Poultry'
    OTHER = 'Other'


class ProductUnit(StrEnum):
    KG = 'kg'
    GRAM = 'gram'
    LITRE = 'litre'
    PIECE = 'piece'
    DOZEN = 'dozen'
    QUINTAL = 'quintal'


def is_whole_number(value: Any) -> bool:
    # bool is an int subclass but never a quantity
    return isinstance(value, int) and not isinstance(value, bool)


def ensure_positive_quantity(value: Any) -> int:
    if not is_whole_number(value) or value < 1:
        raise InvalidQuantityError(f'Quantity must be a positive integer, got {value!r}')
    return value


def derive_product_status(*, available_quantity: int, is_active: bool) -> ProductStatus:
    if not is_active:
        return ProductStatus.INACTIVE
    if available_quantity == 0:
        return ProductStatus.SOLD
    return ProductStatus.ACTIVE


def _validate_text(instance: 'Product', attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DomainError(f'Product {attribute.name} is required')


def _to_price(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise DomainError(f'Price must be a number, got {value!r}')
    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise DomainError(f'Price must be a number, got {value!r}') from e
    if not price.is_finite():
        raise DomainError(f'Price must be a number, got {value!r}')
    return price


def _validate_price(instance: 'Product', attribute: attrs.Attribute, value: Decimal) -> None:
    if value < 0:
        raise DomainError('Price must not be negative')


def _enum_converter(enum_cls: type[StrEnum]) -> Any:
    def _convert(value: Any) -> StrEnum:
        try:
            return enum_cls(value)
        except ValueError as e:
            raise DomainError(f'Invalid {enum_cls.__name__}: {value!r}') from e

    return _convert


def _validate_flag(instance: 'Product', attribute: attrs.Attribute, value: bool) -> None:
    if not isinstance(value, bool):
        raise DomainError(f'Product {attribute.name} must be true or false, got {value!r}')


def _validate_stock(instance: 'Product', attribute: attrs.Attribute, value: int) -> None:
    if not is_whole_number(value) or value < 0:
        raise InvalidQuantityError(f'Available quantity must be a non-negative integer, got {value!r}')


# Fields the owning farmer may edit directly; stock goes through set_quantity
EDITABLE_FIELDS = frozenset(
    {'name', 'description', 'category', 'unit', 'price', 'is_organic', 'harvest_date', 'is_active'}
)


@attrs.define
class Product:
    """
    A farmer's listing.

    ``status`` is derived from ``(available_quantity, is_active)`` and recomputed
    by every mutation; ``version`` increases by one per mutation and is the
    expected value of the next conditional write. ``views`` sits outside that
    check: it is bumped by its own increment and never moves ``version``.
    """

    id: UUID
    owner_id: int
    name: str = attrs.field(validator=_validate_text)
    description: str = attrs.field(validator=_validate_text)
    category: ProductCategory = attrs.field(converter=_enum_converter(ProductCategory))
    unit: ProductUnit = attrs.field(converter=_enum_converter(ProductUnit))
    price: Decimal = attrs.field(converter=_to_price, validator=_validate_price)
    available_quantity: int = attrs.field(validator=_validate_stock)
    is_organic: bool = attrs.field(default=False, validator=_validate_flag)
    harvest_date: Optional[date] = None
    is_active: bool = attrs.field(default=True, validator=_validate_flag)
    status: ProductStatus = ProductStatus.ACTIVE
    views: int = 0
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        owner_id: int,
        name: str,
        description: str,
        category: ProductCategory,
        unit: ProductUnit,
        price: Decimal,
        available_quantity: int,
        is_organic: bool = False,
        harvest_date: Optional[date] = None,
    ) -> 'Product':
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            owner_id=owner_id,
            name=name,
            description=description,
            category=category,
            unit=unit,
            price=price,
            available_quantity=available_quantity,
            is_organic=is_organic,
            harvest_date=harvest_date,
            is_active=True,
            status=derive_product_status(available_quantity=available_quantity, is_active=True),
            views=0,
            version=1,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id

    def _mutate(self, **changes: Any) -> 'Product':
        available_quantity = changes.get('available_quantity', self.available_quantity)
        is_active = changes.get('is_active', self.is_active)
        return attrs.evolve(
            self,
            **changes,
            status=derive_product_status(available_quantity=available_quantity, is_active=is_active),
            version=self.version + 1,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def reserve(self, amount: int) -> 'Product':
        amount = ensure_positive_quantity(amount)
        if self.available_quantity < amount:
            raise InsufficientStockError(
                f'Insufficient stock: requested {amount}, available {self.available_quantity}'
            )
        return self._mutate(available_quantity=self.available_quantity - amount)

    @Logger.io
    def release(self, amount: int) -> 'Product':
        amount = ensure_positive_quantity(amount)
        return self._mutate(available_quantity=self.available_quantity + amount)

    @Logger.io
    def set_quantity(self, quantity: int) -> 'Product':
        if not is_whole_number(quantity) or quantity < 0:
            raise InvalidQuantityError(f'Quantity must be a non-negative integer, got {quantity!r}')
        return self._mutate(available_quantity=quantity)

    @Logger.io
    def update_details(self, **changes: Any) -> 'Product':
        if unknown := set(changes) - EDITABLE_FIELDS:
            raise DomainError(f'Fields cannot be updated: {", ".join(sorted(unknown))}')
        return self._mutate(**changes)

    def record_view(self) -> 'Product':
        # Neither version nor updated_at moves: a view is not an edit of the listing
        return attrs.evolve(self, views=self.views + 1)
