"""
Prometheus Metrics for the location lineage service.

Centralized metrics definitions for:
- Store operations (create, lookups, scans)
- Ancestor resolution (outcomes, chain lengths, cycle guard)
- API endpoints

All modules import metrics from here to keep names consistent.
"""

import logging

from prometheus_client import Counter, Histogram, Info

logger = logging.getLogger(__name__)

# =============================================================================
# SERVICE INFORMATION
# =============================================================================

service_info = Info("lineage", "Location Lineage Service Information")
service_info.info(
    {
        "version": "0.1.0",
        "service": "api",
        "description": "Location catalog with ancestor chain resolution",
    }
)

# =============================================================================
# STORE METRICS
# =============================================================================

store_operations_total = Counter(
    "lineage_store_operations_total",
    "Total store operations",
    ["operation", "outcome"],  # outcome: ok, conflict, timeout, error
)

store_operation_duration_seconds = Histogram(
    "lineage_store_operation_duration_seconds",
    "Time taken by store operations",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5],
)

# =============================================================================
# ANCESTOR RESOLUTION METRICS
# =============================================================================

ancestor_resolutions_total = Counter(
    "lineage_ancestor_resolutions_total",
    "Total ancestor chain resolutions",
    ["strategy", "outcome"],  # outcome: root, dangling, empty, cycle_guard
)

ancestor_chain_length = Histogram(
    "lineage_ancestor_chain_length",
    "Number of ancestors returned per resolution",
    buckets=[0, 1, 2, 3, 5, 8, 13, 21, 34, 64],
)

cycle_guard_trips_total = Counter(
    "lineage_cycle_guard_trips_total",
    "Ancestor resolutions aborted by the depth bound",
)

# =============================================================================
# API METRICS
# =============================================================================

api_requests_total = Counter(
    "lineage_api_requests_total",
    "Total API requests",
    ["method", "endpoint", "status_code"],
)

api_request_duration_seconds = Histogram(
    "lineage_api_request_duration_seconds",
    "API request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1, 2, 5],
)

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def record_store_operation(operation: str, outcome: str, duration_seconds: float) -> None:
    """Record a store operation."""
    store_operations_total.labels(operation=operation, outcome=outcome).inc()
    store_operation_duration_seconds.labels(operation=operation).observe(duration_seconds)


def record_ancestor_resolution(strategy: str, outcome: str, chain_length: int) -> None:
    """Record a completed ancestor resolution."""
    ancestor_resolutions_total.labels(strategy=strategy, outcome=outcome).inc()
    ancestor_chain_length.observe(chain_length)


def record_cycle_guard_trip(strategy: str) -> None:
    """Record a resolution aborted by the depth bound."""
    cycle_guard_trips_total.inc()
    ancestor_resolutions_total.labels(strategy=strategy, outcome="cycle_guard").inc()


def record_api_request(
    method: str, endpoint: str, status_code: int, duration_seconds: float
) -> None:
    """Record API request."""
    api_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()
    api_request_duration_seconds.labels(
        method=method,
        endpoint=endpoint,
    ).observe(duration_seconds)
