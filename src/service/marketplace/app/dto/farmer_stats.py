from decimal import Decimal
from typing import List

import attrs

from src.service.marketplace.domain.entity.order_entity import Order


@attrs.define(frozen=True)
class FarmerStats:
    active_listings: int
    pending_orders: int
    total_sales: Decimal
    recent_activity: List[Order] = attrs.field(factory=list)
