"""
Observability module for the location lineage service.

Provides:
- Structured JSON logging (logging.py)
- Prometheus metrics (metrics.py)
"""

from .logging import (
    setup_logging,
    get_logger,
    LogContext,
    set_trace_id,
    get_trace_id,
    clear_trace_id,
)

from .metrics import (
    record_ancestor_resolution,
    record_api_request,
    record_cycle_guard_trip,
    record_store_operation,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LogContext",
    "set_trace_id",
    "get_trace_id",
    "clear_trace_id",
    # Metrics helpers
    "record_ancestor_resolution",
    "record_api_request",
    "record_cycle_guard_trip",
    "record_store_operation",
]
