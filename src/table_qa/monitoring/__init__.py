"""Monitoring and metrics instrumentation for the Table QA Service.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from table_qa.monitoring.metrics import (
    inference_latency_seconds,
    inference_requests_total,
    table_load_failures_total,
    table_rows_loaded,
)

__all__ = [
    "inference_requests_total",
    "inference_latency_seconds",
    "table_load_failures_total",
    "table_rows_loaded",
]
