from typing import List, Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.marketplace.app.command.cancel_order_use_case import CancelOrderUseCase
from src.service.marketplace.app.command.create_order_use_case import CreateOrderUseCase
from src.service.marketplace.app.command.update_order_status_use_case import (
    UpdateOrderStatusUseCase,
)
from src.service.marketplace.app.query.get_order_use_case import GetOrderUseCase
from src.service.marketplace.app.query.list_orders_use_case import ListOrdersUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import (
    RoleAuthStrategy,
    get_current_user,
    require_buyer,
    require_farmer,
)
from src.service.marketplace.driving_adapter.http_controller.schema.order_schema import (
    OrderCreateRequest,
    OrderResponse,
    OrderStatusUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/my_order')
@Logger.io
async def list_my_orders(
    order_status: Optional[OrderStatus] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListOrdersUseCase = Depends(ListOrdersUseCase.depends),
) -> List[OrderResponse]:
    """Buyers see the orders they placed, farmers the orders for their products"""
    if RoleAuthStrategy.is_buyer(current_user):
        orders = await use_case.list_buyer_orders(buyer_id=current_user.id, status=order_status)
    elif RoleAuthStrategy.is_farmer(current_user):
        orders = await use_case.list_farmer_orders(farmer_id=current_user.id, status=order_status)
    else:
        orders = []
    return [OrderResponse.from_entity(order) for order in orders]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_order(
    request: OrderCreateRequest,
    current_user: UserEntity = Depends(require_buyer),
    use_case: CreateOrderUseCase = Depends(CreateOrderUseCase.depends),
) -> OrderResponse:
    with tracer.start_as_current_span('controller.create_order') as span:
        span.set_attribute('product_id', str(request.product_id))
        span.set_attribute('buyer_id', current_user.id)

        order = await use_case.execute(
            buyer_id=current_user.id,
            product_id=request.product_id,
            quantity=request.quantity,  # type: ignore[arg-type]
            delivery_address=request.delivery_address.to_value_object(),
            payment_method=request.payment_method,
            notes=request.notes,
        )

        span.set_attribute('order.id', str(order.id))
        return OrderResponse.from_entity(order)


@router.get('/{order_id}')
@Logger.io
async def get_order(
    order_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetOrderUseCase = Depends(GetOrderUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(order_id=order_id, actor_id=current_user.id)
    return OrderResponse.from_entity(order)


@router.patch('/{order_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_order(
    order_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_buyer),
    use_case: CancelOrderUseCase = Depends(CancelOrderUseCase.depends),
) -> OrderResponse:
    # Use case will raise exceptions for validation errors (Fail Fast)
    order = await use_case.execute(order_id=order_id, actor_id=current_user.id)
    return OrderResponse.from_entity(order)


@router.patch('/{order_id}/status', status_code=status.HTTP_200_OK)
@Logger.io
async def update_order_status(
    order_id: UtilsUUID7,
    request: OrderStatusUpdateRequest,
    current_user: UserEntity = Depends(require_farmer),
    use_case: UpdateOrderStatusUseCase = Depends(UpdateOrderStatusUseCase.depends),
) -> OrderResponse:
    order = await use_case.execute(
        order_id=order_id, actor_id=current_user.id, new_status=request.status
    )
    return OrderResponse.from_entity(order)
