"""Application layer interfaces (Ports)"""

from src.service.marketplace.app.interface.i_inventory_ledger import IInventoryLedger
from src.service.marketplace.app.interface.i_order_command_repo import IOrderCommandRepo
from src.service.marketplace.app.interface.i_order_query_repo import IOrderQueryRepo
from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.app.interface.i_product_query_repo import IProductQueryRepo

__all__ = [
    'IInventoryLedger',
    'IOrderCommandRepo',
    'IOrderQueryRepo',
    'IProductCommandRepo',
    'IProductQueryRepo',
]
