"""
Optimistic read-modify-write for products.

Every change to a stored product (stock, price, details, view counter) goes
through ``ProductAtomicUpdater.apply``:

1. read the product and its ``version``
2. run a pure mutation on the entity (domain rules raise here)
3. write it back with ``UPDATE ... WHERE id = :id AND version = :read_version``

A write that matches no row lost the race to a concurrent writer; the loop
re-reads and tries again with linear backoff. Domain errors from step 2 are
never retried.
"""

from time import perf_counter
from typing import Callable

import anyio
from uuid_utils import UUID

from src.platform.exception.exceptions import (
    CustomBaseError,
    NotFoundError,
    TransientConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_product_command_repo import IProductCommandRepo
from src.service.marketplace.domain.entity.product_entity import Product


ProductMutation = Callable[[Product], Product]


class ProductAtomicUpdater:
    def __init__(
        self,
        *,
        product_command_repo: IProductCommandRepo,
        max_retries: int = 5,
        retry_backoff_seconds: float = 0.01,
    ) -> None:
        self.product_command_repo = product_command_repo
        self.max_retries = max(1, max_retries)
        self.retry_backoff_seconds = retry_backoff_seconds

    async def apply(
        self, *, product_id: UUID, mutation: ProductMutation, operation: str
    ) -> tuple[Product, Product]:
        """
        Returns:
            (snapshot, stored): the product as read by the winning attempt and
            the product as written by it

        Raises:
            NotFoundError: product does not exist (or was deleted mid-retry)
            TransientConflictError: every attempt lost the race
        """
        started = perf_counter()
        try:
            result = await self._apply_with_retry(
                product_id=product_id, mutation=mutation, operation=operation
            )
        except CustomBaseError as e:
            metrics.record_stock_operation(
                operation=operation, result=type(e).__name__, duration=perf_counter() - started
            )
            raise
        metrics.record_stock_operation(
            operation=operation, result='success', duration=perf_counter() - started
        )
        return result

    async def _apply_with_retry(
        self, *, product_id: UUID, mutation: ProductMutation, operation: str
    ) -> tuple[Product, Product]:
        for attempt in range(1, self.max_retries + 1):
            snapshot = await self.product_command_repo.get_by_id(product_id=product_id)
            if snapshot is None:
                raise NotFoundError('Product not found')

            updated = mutation(snapshot)
            stored = await self.product_command_repo.compare_and_swap(
                product=updated, expected_version=snapshot.version
            )
            if stored is not None:
                return snapshot, stored

            metrics.record_cas_conflict(operation=operation)
            Logger.base.warning(
                f'🔁 [{operation.upper()}] version conflict on product {product_id} '
                f'(v{snapshot.version}), attempt {attempt}/{self.max_retries}'
            )
            if attempt < self.max_retries:
                await anyio.sleep(self.retry_backoff_seconds * attempt)

        raise TransientConflictError(
            f'Product {product_id} is being updated concurrently, please retry'
        )
