"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.marketplace.driven_adapter.model.order_model import OrderModel
from src.service.marketplace.driven_adapter.model.product_model import ProductModel

__all__ = [
    'OrderModel',
    'ProductModel',
]
