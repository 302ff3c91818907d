"""
Row <-> entity conversion shared by the SQLAlchemy repositories.

SQLAlchemy with as_uuid=True returns stdlib uuid.UUID while entities carry
uuid_utils.UUID, so ids are converted on both sides.
"""

from typing import Any
import uuid

from uuid_utils import UUID

from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.entity.product_entity import Product, ProductStatus
from src.service.marketplace.domain.enum.order_status import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress
from src.service.marketplace.driven_adapter.model.order_model import OrderModel
from src.service.marketplace.driven_adapter.model.product_model import ProductModel


def to_db_uuid(value: UUID | uuid.UUID | str) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def product_to_entity(db_product: ProductModel) -> Product:
    return Product(
        id=UUID(str(db_product.id)),
        owner_id=db_product.owner_id,
        name=db_product.name,
        description=db_product.description,
        category=db_product.category,
        unit=db_product.unit,
        price=db_product.price,
        available_quantity=db_product.available_quantity,
        is_organic=db_product.is_organic,
        harvest_date=db_product.harvest_date,
        is_active=db_product.is_active,
        status=ProductStatus(db_product.status),
        views=db_product.views,
        version=db_product.version,
        created_at=db_product.created_at,
        updated_at=db_product.updated_at,
    )


def product_to_values(product: Product) -> dict[str, Any]:
    """Column values for INSERT / UPDATE (enums stored as their string value)"""
    return {
        'id': to_db_uuid(product.id),
        'owner_id': product.owner_id,
        'name': product.name,
        'description': product.description,
        'category': product.category.value,
        'unit': product.unit.value,
        'price': product.price,
        'available_quantity': product.available_quantity,
        'is_organic': product.is_organic,
        'harvest_date': product.harvest_date,
        'is_active': product.is_active,
        'status': product.status.value,
        'views': product.views,
        'version': product.version,
        'created_at': product.created_at,
        'updated_at': product.updated_at,
    }


def order_to_entity(db_order: OrderModel) -> Order:
    return Order(
        id=UUID(str(db_order.id)),
        buyer_id=db_order.buyer_id,
        farmer_id=db_order.farmer_id,
        product_id=UUID(str(db_order.product_id)),
        quantity=db_order.quantity,
        unit_price=db_order.unit_price,
        total_amount=db_order.total_amount,
        delivery_address=DeliveryAddress(**db_order.delivery_address),
        payment_method=PaymentMethod(db_order.payment_method),
        payment_status=PaymentStatus(db_order.payment_status),
        status=OrderStatus(db_order.status),
        notes=db_order.notes,
        created_at=db_order.created_at,
        updated_at=db_order.updated_at,
        delivered_at=db_order.delivered_at,
    )


def order_to_values(order: Order) -> dict[str, Any]:
    return {
        'id': to_db_uuid(order.id),
        'buyer_id': order.buyer_id,
        'farmer_id': order.farmer_id,
        'product_id': to_db_uuid(order.product_id),
        'quantity': order.quantity,
        'unit_price': order.unit_price,
        'total_amount': order.total_amount,
        'status': order.status.value,
        'payment_status': order.payment_status.value,
        'payment_method': order.payment_method.value,
        'delivery_address': order.delivery_address.to_dict(),
        'notes': order.notes,
        'created_at': order.created_at,
        'updated_at': order.updated_at,
        'delivered_at': order.delivered_at,
    }
