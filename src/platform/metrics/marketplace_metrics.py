from prometheus_client import Counter, Histogram


class MarketplaceMetrics:
    """
    Marketplace core metrics

    Tracks inventory ledger contention, order lifecycle traffic and the
    error responses the API hands back.
    """

    def __init__(self) -> None:
        # ========== Inventory Ledger ==========
        self.stock_operations = Counter(
            'marketplace_stock_operations_total',
            'Inventory ledger operations',
            ['operation', 'result'],  # operation: reserve/release/set_quantity
        )

        self.stock_operation_duration = Histogram(
            'marketplace_stock_operation_duration_seconds',
            'Inventory ledger operation duration including retries',
            ['operation'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

        self.stock_cas_conflicts = Counter(
            'marketplace_stock_cas_conflicts_total',
            'Optimistic writes that lost a race and were retried',
            ['operation'],
        )

        # Released stock that could not be reserved back after a lost status race;
        # each increment is a product holding more stock than its open orders allow
        self.stock_take_back_failures = Counter(
            'marketplace_stock_take_back_failures_total',
            'Releases left standing after a lost order status race',
            ['to_status'],
        )

        # ========== Order Lifecycle ==========
        self.order_transitions = Counter(
            'marketplace_order_transitions_total',
            'Order status transitions',
            ['from_status', 'to_status'],
        )

        # ========== API ==========
        self.error_responses = Counter(
            'marketplace_error_responses_total',
            'Error responses by error type',
            ['error', 'status_code'],
        )

    # ========== Helper Methods ==========

    def record_stock_operation(self, *, operation: str, result: str, duration: float) -> None:
        self.stock_operations.labels(operation=operation, result=result).inc()
        self.stock_operation_duration.labels(operation=operation).observe(duration)

    def record_cas_conflict(self, *, operation: str) -> None:
        self.stock_cas_conflicts.labels(operation=operation).inc()

    def record_take_back_failure(self, *, to_status: str) -> None:
        self.stock_take_back_failures.labels(to_status=to_status).inc()

    def record_order_transition(self, *, from_status: str, to_status: str) -> None:
        self.order_transitions.labels(from_status=from_status, to_status=to_status).inc()

    def record_error_response(self, *, error: str, status_code: int) -> None:
        self.error_responses.labels(error=error, status_code=str(status_code)).inc()


# Global metrics instance
metrics = MarketplaceMetrics()
