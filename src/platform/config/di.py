"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
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
from src.service.marketplace.driven_adapter.repo.order_command_repo_impl import OrderCommandRepoImpl
from src.service.marketplace.driven_adapter.repo.order_query_repo_impl import OrderQueryRepoImpl
from src.service.marketplace.driven_adapter.repo.product_command_repo_impl import (
    ProductCommandRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.product_query_repo_impl import (
    ProductQueryRepoImpl,
)
from src.service.marketplace.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Backing store for STORAGE_BACKEND=memory
    in_memory_state = providers.Singleton(InMemoryMarketplaceState)

    # Repositories (stateless - use session_factory per call), picked by STORAGE_BACKEND
    product_command_repo = providers.Selector(
        config_service.provided.STORAGE_BACKEND,
        sqlalchemy=providers.Singleton(
            ProductCommandRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryProductCommandRepoImpl, state=in_memory_state),
    )
    product_query_repo = providers.Selector(
        config_service.provided.STORAGE_BACKEND,
        sqlalchemy=providers.Singleton(
            ProductQueryRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryProductQueryRepoImpl, state=in_memory_state),
    )
    order_command_repo = providers.Selector(
        config_service.provided.STORAGE_BACKEND,
        sqlalchemy=providers.Singleton(
            OrderCommandRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryOrderCommandRepoImpl, state=in_memory_state),
    )
    order_query_repo = providers.Selector(
        config_service.provided.STORAGE_BACKEND,
        sqlalchemy=providers.Singleton(
            OrderQueryRepoImpl, session_factory=database.provided.session
        ),
        memory=providers.Singleton(InMemoryOrderQueryRepoImpl, state=in_memory_state),
    )

    # Inventory ledger (sole writer of available_quantity)
    product_atomic_updater = providers.Singleton(
        ProductAtomicUpdater,
        product_command_repo=product_command_repo,
        max_retries=config_service.provided.LEDGER_MAX_RETRIES,
        retry_backoff_seconds=config_service.provided.LEDGER_RETRY_BACKOFF_SECONDS,
    )
    inventory_ledger = providers.Singleton(
        InventoryLedger,
        product_atomic_updater=product_atomic_updater,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
