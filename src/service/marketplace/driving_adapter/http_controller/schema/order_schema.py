from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt

from src.platform.types import UtilsUUID7
from src.service.marketplace.app.dto.farmer_stats import FarmerStats
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.order_status import OrderStatus, PaymentMethod
from src.service.marketplace.domain.value_object.delivery_address import DeliveryAddress


class DeliveryAddressSchema(BaseModel):
    address: str
    city: str
    state: str
    pincode: str
    phone: str

    def to_value_object(self) -> DeliveryAddress:
        return DeliveryAddress(**self.model_dump())


class OrderCreateRequest(BaseModel):
    product_id: UtilsUUID7
    # Strict so JSON true is not coerced to 1; bools and fractional values reach
    # the use case as-is and are refused there with InvalidQuantityError
    quantity: StrictInt | StrictFloat | StrictBool
    delivery_address: DeliveryAddressSchema
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: Optional[str] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'product_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'quantity': 30,
                'delivery_address': {
                    'address': '12 Market Road',
                    'city': 'Pune',
                    'state': 'Maharashtra',
                    'pincode': '411001',
                    'phone': '9876543210',
                },
                'payment_method': 'cash',
                'notes': 'Deliver before noon',
            }
        }
    }


class OrderStatusUpdateRequest(BaseModel):
    status: OrderStatus

    model_config = {'json_schema_extra': {'example': {'status': 'accepted'}}}


class OrderResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-6a10-7c4e-b1c5-123456789abc',  # UUID7
                'buyer_id': 2,
                'farmer_id': 1,
                'product_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'quantity': 30,
                'unit_price': '10.00',
                'total_amount': '300.00',
                'status': 'pending',
                'payment_status': 'pending',
                'payment_method': 'cash',
                'delivery_address': {
                    'address': '12 Market Road',
                    'city': 'Pune',
                    'state': 'Maharashtra',
                    'pincode': '411001',
                    'phone': '9876543210',
                },
                'notes': None,
                'created_at': '2025-01-10T10:30:00',
                'delivered_at': None,
            }
        },
    }

    id: UtilsUUID7  # UUID7
    buyer_id: int
    farmer_id: int
    product_id: UtilsUUID7
    quantity: int
    unit_price: Decimal
    total_amount: Decimal
    status: str
    payment_status: str
    payment_method: str
    delivery_address: DeliveryAddressSchema
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderResponse':
        return cls(
            id=order.id,
            buyer_id=order.buyer_id,
            farmer_id=order.farmer_id,
            product_id=order.product_id,
            quantity=order.quantity,
            unit_price=order.unit_price,
            total_amount=order.total_amount,
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_method=order.payment_method.value,
            delivery_address=DeliveryAddressSchema(**order.delivery_address.to_dict()),
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
            delivered_at=order.delivered_at,
        )


class FarmerStatsResponse(BaseModel):
    active_listings: int
    pending_orders: int
    total_sales: Decimal
    recent_activity: List[OrderResponse]

    model_config = {
        'json_schema_extra': {
            'example': {
                'active_listings': 4,
                'pending_orders': 2,
                'total_sales': '1250.00',
                'recent_activity': [],
            }
        }
    }

    @classmethod
    def from_stats(cls, stats: FarmerStats) -> 'FarmerStatsResponse':
        return cls(
            active_listings=stats.active_listings,
            pending_orders=stats.pending_orders,
            total_sales=stats.total_sales,
            recent_activity=[OrderResponse.from_entity(order) for order in stats.recent_activity],
        )
