"""Marketplace Domain Value Objects"""

from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress

__all__ = ['DeliveryAddress']
