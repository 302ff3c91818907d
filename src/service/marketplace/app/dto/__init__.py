"""Application layer DTOs"""

from src.service.marketplace.app.dto.farmer_stats import FarmerStats
from src.service.marketplace.app.dto.order_query import OrderQuery
from src.service.marketplace.app.dto.reservation import Reservation

__all__ = ['FarmerStats', 'OrderQuery', 'Reservation']
