"""Prometheus metrics for the quotation service.

Everything registers on ``registry`` rather than the process default, so
``/metrics`` exposes only what this service defines.
"""
import time
from functools import wraps
from typing import Callable

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

registry = CollectorRegistry()

# HTTP
request_count = Counter(
    'http_requests_total', 'HTTP requests by route and status',
    ['method', 'endpoint', 'status'], registry=registry,
)
request_duration = Histogram(
    'http_request_duration_seconds', 'HTTP request latency',
    ['method', 'endpoint'], registry=registry,
)

# Database
db_operations = Counter(
    'db_operations_total', 'Database operations by outcome',
    ['operation', 'table', 'status'], registry=registry,
)
db_query_duration = Histogram(
    'db_query_duration_seconds', 'Database operation latency',
    ['table', 'operation'], registry=registry,
)

# Result cache
cache_hits = Counter('cache_hits_total', 'Cache hits', ['cache'], registry=registry)
cache_misses = Counter('cache_misses_total', 'Cache misses', ['cache'], registry=registry)
cache_errors = Counter(
    'cache_errors_total', 'Cache calls that failed or timed out',
    ['cache', 'operation'], registry=registry,
)

# Quotations
quotations_calculated = Counter(
    'quotations_calculated_total', 'Breakdowns computed, cache misses only',
    ['platform'], registry=registry,
)
quotation_calculation_duration = Histogram(
    'quotation_calculation_duration_seconds', 'Time spent in the pricing calculator',
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
    registry=registry,
)
quotation_status_changes = Counter(
    'quotation_status_changes_total', 'Quotation status transitions',
    ['from_status', 'to_status'], registry=registry,
)
parameters_version = Gauge(
    'global_parameters_version', 'Version of the global pricing parameters last read',
    registry=registry,
)

# Access control and audit
rate_limit_exceeded = Counter(
    'rate_limit_exceeded_total', 'Requests rejected by the rate limiter',
    ['user_id'], registry=registry,
)
audit_logs_created = Counter(
    'audit_logs_created_total', 'Audit rows written',
    ['action'], registry=registry,
)

# Dependencies
redis_connected = Gauge('redis_connected', 'Redis reachable (1) or not (0)', registry=registry)
db_connected = Gauge('db_connected', 'Database reachable (1) or not (0)', registry=registry)


def track_db_operation(operation: str, table: str):
    """Count and time an async database call, labelling failures as ``error``."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            status = 'error'
            try:
                result = await func(*args, **kwargs)
                status = 'success'
                return result
            finally:
                db_operations.labels(operation=operation, table=table, status=status).inc()
                db_query_duration.labels(table=table, operation=operation).observe(
                    time.perf_counter() - start_time
                )
        return wrapper
    return decorator


def get_metrics_text() -> str:
    return generate_latest(registry).decode('utf-8')
