from decimal import Decimal

import attrs
from uuid_utils import UUID

from src.service.marketplace.domain.entity.product_entity import ProductStatus


@attrs.define(frozen=True)
class Reservation:
    """
    Proof of a successful reserve.

    unit_price and farmer_id come from the same product read the stock
    decrement was conditioned on, so an order built from them never pairs a
    price with a different stock state.
    """

    product_id: UUID
    amount: int
    unit_price: Decimal
    farmer_id: int
    remaining_quantity: int
    product_status: ProductStatus
