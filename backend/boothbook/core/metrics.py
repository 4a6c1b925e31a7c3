"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Reservation lifecycle metrics
reservation_operations = Counter(
    'reservation_operations_total',
    'Reservation lifecycle operations',
    ['operation', 'result']  # create/update_status/cancel x success/conflict/out_of_bounds/...
)

reservation_latency = Histogram(
    'reservation_operation_latency_seconds',
    'Reservation lifecycle operation latency',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

availability_recomputes = Counter(
    'booth_availability_recomputes_total',
    'Booth availability recomputations',
    ['status']  # available, reserved, unavailable
)

# Database metrics
db_operations = Counter(
    'db_operations_total',
    'Total database operations',
    ['operation']  # read, write, retry
)

db_retries = Counter(
    'db_retry_attempts_total',
    'Booth write retries due to version conflicts'
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)

redis_connection_errors = Counter(
    'redis_connection_errors_total',
    'Redis connection errors'
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


# Convenience functions for instrumentation
def record_reservation_operation(operation: str, result: str):
    """Record lifecycle outcome. Result: success or the error kind."""
    reservation_operations.labels(operation=operation, result=result).inc()


def record_availability(status: str):
    availability_recomputes.labels(status=status).inc()


def record_db_operation(operation: str):
    """Record database operation. Operation: read, write, retry"""
    db_operations.labels(operation=operation).inc()


def record_version_conflict():
    db_retries.inc()


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
