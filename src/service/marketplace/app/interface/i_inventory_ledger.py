from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.marketplace.app.dto.reservation import Reservation
from src.service.marketplace.domain.entity.product_entity import Product


class IInventoryLedger(ABC):
    """
    Sole writer of Product.available_quantity.

    Each operation is atomic with respect to every other ledger operation on
    the same product; operations on different products never contend.
    """

    @abstractmethod
    async def reserve(self, *, product_id: UUID, amount: int) -> Reservation:
        """
        Raises:
            InvalidQuantityError: amount is not an integer >= 1
            NotFoundError: product does not exist
            InsufficientStockError: available_quantity < amount, nothing changed
            TransientConflictError: lost the write race on every attempt
        """
        pass

    @abstractmethod
    async def release(self, *, product_id: UUID, amount: int) -> Product:
        pass

    @abstractmethod
    async def set_quantity(self, *, product_id: UUID, quantity: int) -> Product:
        """Owner restock / correction to an absolute quantity"""
        pass
