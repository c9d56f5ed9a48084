"""Custom Prometheus metrics for the Table QA Service.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- inference_requests_total{outcome="rejected"} (credential or quota problems)
- inference_requests_total{outcome="failed"} (network trouble or provider format drift)
- table_load_failures_total (the CSV source has been edited into a bad state)
"""

from prometheus_client import Counter, Histogram

# === Inference Metrics ===

inference_requests_total = Counter(
    "inference_requests_total",
    "Total table-QA inference calls by terminal outcome",
    ["outcome"],
)
"""
Inference calls counter by terminal outcome.

Labels:
- outcome: success (Answer decoded), rejected (non-success HTTP status),
  failed (transport error, timeout or undecodable body)

Alert thresholds:
- WARN: rejected rate > 5% of total calls
- CRITICAL: failed rate > 10% of total calls
"""

inference_latency_seconds = Histogram(
    "inference_latency_seconds",
    "Table-QA inference round trip latency in seconds",
    ["outcome"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
"""
Round trip latency histogram, measured around the single outbound POST.

The top bucket is above the default deadline so timeouts stay visible.
"""

# === Table Loading Metrics ===

table_load_failures_total = Counter(
    "table_load_failures_total",
    "Total CSV table load failures by error type",
    ["error_type"],
)
"""
Table load failures by exception class.

Labels:
- error_type: ParseError, MalformedRowError, EmptyTableError, TableSourceError
"""

table_rows_loaded = Histogram(
    "table_rows_loaded",
    "Number of data rows per loaded table",
    buckets=[1, 10, 50, 100, 500, 1000, 5000],
)
