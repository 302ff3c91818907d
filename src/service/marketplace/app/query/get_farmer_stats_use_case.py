from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.dto.farmer_stats import FarmerStats
from src.service.marketplace.app.dto.order_query import OrderQuery
from src.service.marketplace.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.marketplace.app.interface.i_product_query_repo import IProductQueryRepo
from src.service.marketplace.domain.entity.product_entity import ProductStatus
from src.service.marketplace.domain.enum.order_status import OrderStatus


# Orders that count towards sales: accepted ones are committed revenue
SALES_STATUSES = frozenset({OrderStatus.ACCEPTED, OrderStatus.DELIVERED})


class GetFarmerStatsUseCase:
    """
    Dashboard summary for one farmer, computed from current data on every call.

    The four reads are independent and take no locks; a concurrent write may
    show up in one figure and not yet in another.
    """

    def __init__(
        self,
        *,
        product_query_repo: IProductQueryRepo,
        order_query_repo: IOrderQueryRepo,
        recent_activity_limit: int = 10,
    ) -> None:
        self.product_query_repo = product_query_repo
        self.order_query_repo = order_query_repo
        self.recent_activity_limit = recent_activity_limit
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        product_query_repo: IProductQueryRepo = Depends(Provide[Container.product_query_repo]),
        order_query_repo: IOrderQueryRepo = Depends(Provide[Container.order_query_repo]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            product_query_repo=product_query_repo,
            order_query_repo=order_query_repo,
            recent_activity_limit=config.STATS_RECENT_ACTIVITY_LIMIT,
        )

    @Logger.io
    async def execute(self, *, farmer_id: int) -> FarmerStats:
        with self.tracer.start_as_current_span(
            'use_case.get_farmer_stats', attributes={'farmer.id': farmer_id}
        ):
            active_listings = await self.product_query_repo.count_by_owner(
                owner_id=farmer_id, status=ProductStatus.ACTIVE
            )
            pending_orders = await self.order_query_repo.count_orders(
                criteria=OrderQuery(farmer_id=farmer_id, statuses={OrderStatus.PENDING})
            )
            total_sales = await self.order_query_repo.sum_total_amount(
                criteria=OrderQuery(farmer_id=farmer_id, statuses=SALES_STATUSES)
            )
            recent_activity = await self.order_query_repo.query_orders(
                criteria=OrderQuery(farmer_id=farmer_id, limit=self.recent_activity_limit)
            )

        return FarmerStats(
            active_listings=active_listings,
            pending_orders=pending_orders,
            total_sales=total_sales,
            recent_activity=recent_activity,
        )
