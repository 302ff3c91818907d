"""Order listing criteria shared by the stats aggregator and order listings."""

from typing import Iterable, Optional

import attrs
from uuid_utils import UUID

from src.service.marketplace.domain.enum.order_status import OrderStatus


def _to_status_set(value: Optional[Iterable[OrderStatus]]) -> Optional[frozenset[OrderStatus]]:
    return None if value is None else frozenset(OrderStatus(status) for status in value)


@attrs.define(frozen=True)
class OrderQuery:
    """
    All given filters must match. ``statuses=None`` means any status.
    Results are always sorted by created_at, newest first.
    """

    buyer_id: Optional[int] = None
    farmer_id: Optional[int] = None
    product_id: Optional[UUID] = None
    statuses: Optional[frozenset[OrderStatus]] = attrs.field(default=None, converter=_to_status_set)
    limit: Optional[int] = None
