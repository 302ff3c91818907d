"""In-memory adapters wired the way the container wires them (no DI, no HTTP)."""

import attrs

from src.service.marketplace.app.service.inventory_ledger import InventoryLedger
from src.service.marketplace.app.service.product_atomic_updater import ProductAtomicUpdater
from src.service.marketplace.driven_adapter.repo.in_memory_order_repo_impl import (
    InMemoryOrderCommandRepoImpl,
    InMemoryOrderQueryRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.in_memory_product_repo_impl import (
    InMemoryProductCommandRepoImpl,
    InMemoryProductQueryRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.in_memory_state import InMemoryMarketplaceState


@attrs.define
class InMemoryMarketplace:
    state: InMemoryMarketplaceState
    product_command_repo: InMemoryProductCommandRepoImpl
    product_query_repo: InMemoryProductQueryRepoImpl
    order_command_repo: InMemoryOrderCommandRepoImpl
    order_query_repo: InMemoryOrderQueryRepoImpl
    product_atomic_updater: ProductAtomicUpdater
    inventory_ledger: InventoryLedger

    @classmethod
    def build(cls, *, max_retries: int = 20) -> 'InMemoryMarketplace':
        state = InMemoryMarketplaceState()
        product_command_repo = InMemoryProductCommandRepoImpl(state=state)
        updater = ProductAtomicUpdater(
            product_command_repo=product_command_repo,
            max_retries=max_retries,
            retry_backoff_seconds=0,
        )
        return cls(
            state=state,
            product_command_repo=product_command_repo,
            product_query_repo=InMemoryProductQueryRepoImpl(state=state),
            order_command_repo=InMemoryOrderCommandRepoImpl(state=state),
            order_query_repo=InMemoryOrderQueryRepoImpl(state=state),
            product_atomic_updater=updater,
            inventory_ledger=InventoryLedger(product_atomic_updater=updater),
        )
