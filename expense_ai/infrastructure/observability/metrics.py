"""Prometheus metrics for AI operation outcomes and chat-completion latency"""

from prometheus_client import Counter, Histogram

# Operation outcomes
operation_counter = Counter(
    "expense_ai_operation_total",
    "AI operations completed",
    ["operation", "outcome"],  # success | fallback
)

# Chat-completion service
ai_request_latency_histogram = Histogram(
    "ai_request_latency_seconds",
    "Chat-completion response time",
    ["operation"],
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

ai_request_failures_counter = Counter(
    "ai_request_failures_total",
    "Failed AI operations by failure kind",
    ["operation", "kind"],  # service | malformed | unexpected
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_outcome(operation: str, degraded: bool) -> None:
    """Record whether an operation produced a genuine answer or a fallback"""
    outcome = "fallback" if degraded else "success"
    operation_counter.labels(operation=operation, outcome=outcome).inc()


def record_failure(operation: str, kind: str) -> None:
    ai_request_failures_counter.labels(operation=operation, kind=kind).inc()
