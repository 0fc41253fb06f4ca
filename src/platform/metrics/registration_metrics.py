from prometheus_client import Counter, Histogram


class RegistrationMetrics:
    """
    Prometheus collectors for seat accounting and the registration workflow.

    Exposed on /metrics; counters are process-wide.
    """

    def __init__(self) -> None:
        self.capacity_operations = Counter(
            'event_capacity_operations_total',
            'Capacity ledger operations by outcome',
            ['operation', 'result'],  # reserve/release/resize x ok/full/not_found/conflict
        )

        self.capacity_cas_retries = Counter(
            'event_capacity_cas_retries_total',
            'Optimistic-concurrency retries after a lost capacity write',
            ['operation'],
        )

        self.capacity_operation_duration = Histogram(
            'event_capacity_operation_duration_seconds',
            'Capacity ledger operation duration including retries',
            ['operation'],
            buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
        )

        self.registration_transitions = Counter(
            'registration_transitions_total',
            'Registration lifecycle transitions',
            # from_status "none" on create, to_status "deleted" on delete
            ['from_status', 'to_status'],
        )

    def record_capacity_operation(self, *, operation: str, result: str, duration: float) -> None:
        self.capacity_operations.labels(operation=operation, result=result).inc()
        self.capacity_operation_duration.labels(operation=operation).observe(duration)

    def record_cas_retry(self, *, operation: str) -> None:
        self.capacity_cas_retries.labels(operation=operation).inc()

    def record_transition(self, *, from_status: str, to_status: str) -> None:
        self.registration_transitions.labels(from_status=from_status, to_status=to_status).inc()


# Global metrics instance
metrics = RegistrationMetrics()
