from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.marketplace.domain.entity.product_entity import Product, ProductStatus


class IProductQueryRepo(ABC):
    """Repository interface for product read operations"""

    @abstractmethod
    async def get_by_id(self, *, product_id: UUID) -> Optional[Product]:
        pass

    @abstractmethod
    async def list_active(self) -> List[Product]:
        """Active listings, newest first"""
        pass

    @abstractmethod
    async def list_by_owner(self, *, owner_id: int) -> List[Product]:
        """All listings of a farmer regardless of status, newest first"""
        pass

    @abstractmethod
    async def count_by_owner(self, *, owner_id: int, status: Optional[ProductStatus] = None) -> int:
        pass
