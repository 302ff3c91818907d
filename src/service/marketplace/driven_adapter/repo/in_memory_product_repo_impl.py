from typing import List, Optional

import anyio
import attrs
from uuid_utils import UUID

from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.app.interface.i_product_query_repo import IProductQueryRepo
from src.service.marketplace.domain.entity.product_entity import Product, ProductStatus
from src.service.marketplace.driven_adapter.repo.in_memory_state import InMemoryMarketplaceState


def _newest_first(products: List[Product]) -> List[Product]:
    return sorted(products, key=lambda product: (product.created_at, str(product.id)), reverse=True)


class InMemoryProductCommandRepoImpl(IProductCommandRepo):
    def __init__(self, *, state: InMemoryMarketplaceState):
        self.state = state

    async def create(self, *, product: Product) -> Product:
        await anyio.sleep(0)
        self.state.products[self.state.key(product.id)] = product
        return product

    async def get_by_id(self, *, product_id: UUID) -> Optional[Product]:
        await anyio.sleep(0)
        return self.state.products.get(self.state.key(product_id))

    async def compare_and_swap(self, *, product: Product, expected_version: int) -> Optional[Product]:
        # Yield first so concurrent callers interleave like they would on a real connection
        await anyio.sleep(0)
        key = self.state.key(product.id)
        current = self.state.products.get(key)
        if current is None or current.version != expected_version:
            return None
        # views has its own increment; keep the stored count
        stored = attrs.evolve(product, views=current.views)
        self.state.products[key] = stored
        return stored

    async def increment_views(self, *, product_id: UUID) -> Optional[Product]:
        await anyio.sleep(0)
        key = self.state.key(product_id)
        current = self.state.products.get(key)
        if current is None:
            return None
        self.state.products[key] = viewed = current.record_view()
        return viewed

    async def delete(self, *, product_id: UUID, expected_version: int) -> bool:
        await anyio.sleep(0)
        key = self.state.key(product_id)
        current = self.state.products.get(key)
        if current is None or current.version != expected_version:
            return False
        del self.state.products[key]
        return True


class InMemoryProductQueryRepoImpl(IProductQueryRepo):
    def __init__(self, *, state: InMemoryMarketplaceState):
        self.state = state

    async def get_by_id(self, *, product_id: UUID) -> Optional[Product]:
        await anyio.sleep(0)
        return self.state.products.get(self.state.key(product_id))

    async def list_active(self) -> List[Product]:
        await anyio.sleep(0)
        return _newest_first(
            [p for p in self.state.products.values() if p.status == ProductStatus.ACTIVE]
        )

    async def list_by_owner(self, *, owner_id: int) -> List[Product]:
        await anyio.sleep(0)
        return _newest_first([p for p in self.state.products.values() if p.owner_id == owner_id])

    async def count_by_owner(self, *, owner_id: int, status: Optional[ProductStatus] = None) -> int:
        await anyio.sleep(0)
        return sum(
            1
            for p in self.state.products.values()
            if p.owner_id == owner_id and (status is None or p.status == status)
        )
