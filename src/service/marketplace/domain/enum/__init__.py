"""Marketplace Domain Enums"""

from src.service.marketplace.domain.enum.order_status import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)

__all__ = ['OrderStatus', 'PaymentMethod', 'PaymentStatus']
