from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.marketplace.app.command.create_product_use_case import CreateProductUseCase
from src.service.marketplace.app.command.delete_product_use_case import DeleteProductUseCase
from src.service.marketplace.app.command.update_product_use_case import UpdateProductUseCase
from src.service.marketplace.app.query.get_farmer_stats_use_case import GetFarmerStatsUseCase
from src.service.marketplace.app.query.get_product_use_case import GetProductUseCase
from src.service.marketplace.app.query.list_products_use_case import ListProductsUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_farmer
from src.service.marketplace.driving_adapter.http_controller.schema.order_schema import (
    FarmerStatsResponse,
)
from src.service.marketplace.driving_adapter.http_controller.schema.product_schema import (
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_product(
    request: ProductCreateRequest,
    current_user: UserEntity = Depends(require_farmer),
    use_case: CreateProductUseCase = Depends(CreateProductUseCase.depends),
) -> ProductResponse:
    product = await use_case.execute(owner_id=current_user.id, **request.model_dump())
    return ProductResponse.from_entity(product)


@router.get('')
@Logger.io
async def list_products(
    use_case: ListProductsUseCase = Depends(ListProductsUseCase.depends),
) -> ProductListResponse:
    """Public catalogue: active listings, newest first"""
    products = await use_case.list_active()
    return ProductListResponse(
        products=[ProductResponse.from_entity(product) for product in products],
        total=len(products),
    )


@router.get('/farmer/my_products')
@Logger.io
async def list_my_products(
    current_user: UserEntity = Depends(require_farmer),
    use_case: ListProductsUseCase = Depends(ListProductsUseCase.depends),
) -> ProductListResponse:
    products = await use_case.list_by_owner(owner_id=current_user.id)
    return ProductListResponse(
        products=[ProductResponse.from_entity(product) for product in products],
        total=len(products),
    )


@router.get('/farmer/stats')
@Logger.io
async def get_farmer_stats(
    current_user: UserEntity = Depends(require_farmer),
    use_case: GetFarmerStatsUseCase = Depends(GetFarmerStatsUseCase.depends),
) -> FarmerStatsResponse:
    with tracer.start_as_current_span('controller.get_farmer_stats') as span:
        span.set_attribute('farmer_id', current_user.id)
        stats = await use_case.execute(farmer_id=current_user.id)
        return FarmerStatsResponse.from_stats(stats)


@router.get('/{product_id}')
@Logger.io
async def get_product(
    product_id: UtilsUUID7,
    use_case: GetProductUseCase = Depends(GetProductUseCase.depends),
) -> ProductResponse:
    product = await use_case.execute(product_id=product_id)
    return ProductResponse.from_entity(product)


@router.patch('/{product_id}')
@Logger.io
async def update_product(
    product_id: UtilsUUID7,
    request: ProductUpdateRequest,
    current_user: UserEntity = Depends(require_farmer),
    use_case: UpdateProductUseCase = Depends(UpdateProductUseCase.depends),
) -> ProductResponse:
    changes = request.model_dump(exclude_unset=True)
    available_quantity = changes.pop('available_quantity', None)
    product = await use_case.execute(
        product_id=product_id,
        actor_id=current_user.id,
        changes=changes,
        available_quantity=available_quantity,
    )
    return ProductResponse.from_entity(product)


@router.delete('/{product_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_product(
    product_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_farmer),
    use_case: DeleteProductUseCase = Depends(DeleteProductUseCase.depends),
) -> None:
    await use_case.execute(product_id=product_id, actor_id=current_user.id)
