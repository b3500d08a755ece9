"""
Prometheus Metrics Registration.

Metrics are exported over HTTP only when METRICS_PORT is set.
"""

from prometheus_client import Counter, Histogram, start_http_server

from nmcp_config.settings import Settings

# ============================================================================
# COUNTERS
# ============================================================================

tool_executions_total = Counter(
    "tool_executions_total",
    "Total tool executions",
    ["tool_name", "status"],  # success, failure
)

rate_limit_retries_total = Counter(
    "notion_rate_limit_retries_total",
    "Remote calls retried after a rate-limit signal",
)

# ============================================================================
# HISTOGRAMS
# ============================================================================

tool_execution_duration = Histogram(
    "tool_execution_duration_seconds",
    "Tool execution duration",
    ["tool_name"],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0),
)


def setup_metrics(settings: Settings) -> bool:
    """Start the Prometheus exporter if a port is configured."""
    if not settings.METRICS_PORT:
        return False
    start_http_server(settings.METRICS_PORT)
    return True
