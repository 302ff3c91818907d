from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.marketplace.domain.entity.product_entity import Product


class IProductCommandRepo(ABC):
    """Product writes. Every mutation of an existing product is a conditional write."""

    @abstractmethod
    async def create(self, *, product: Product) -> Product:
        pass

    @abstractmethod
    async def get_by_id(self, *, product_id: UUID) -> Optional[Product]:
        pass

    @abstractmethod
    async def compare_and_swap(self, *, product: Product, expected_version: int) -> Optional[Product]:
        """
        Persist ``product`` only if the stored row still has ``expected_version``.

        Returns:
            The stored product, or None when the row changed (or vanished) since it was read
        """
        pass

    @abstractmethod
    async def increment_views(self, *, product_id: UUID) -> Optional[Product]:
        """
        Atomically add one to ``views`` without touching ``version``.

        Returns:
            The stored product, or None when it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, *, product_id: UUID, expected_version: int) -> bool:
        """Delete only if untouched since read; False when the row changed or is gone"""
        pass
