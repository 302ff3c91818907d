"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.marketplace.app.command import (
    cancel_order_use_case,
    create_order_use_case,
    create_product_use_case,
    delete_product_use_case,
    update_order_status_use_case,
    update_product_use_case,
)
from src.service.marketplace.app.query import (
    get_farmer_stats_use_case,
    get_order_use_case,
    get_product_use_case,
    list_orders_use_case,
    list_products_use_case,
)
from src.service.marketplace.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_order_use_case,
    cancel_order_use_case,
    update_order_status_use_case,
    create_product_use_case,
    update_product_use_case,
    delete_product_use_case,
    get_order_use_case,
    list_orders_use_case,
    get_product_use_case,
    list_products_use_case,
    get_farmer_stats_use_case,
    role_auth,
]
