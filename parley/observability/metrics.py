"""Prometheus metrics for conversation traffic.

Counts outbound requests, bot replies, delivery failures and dropped
inbound frames per transport.
"""

from prometheus_client import Counter, Histogram

REQUESTS = Counter(
    "parley_requests_total",
    "Total number of requests dispatched to the bot service",
    labelnames=["transport", "request_type"],
)

REPLIES = Counter(
    "parley_replies_total",
    "Total number of bot replies applied to a timeline",
    labelnames=["transport"],
)

DELIVERY_FAILURES = Counter(
    "parley_delivery_failures_total",
    "Total number of requests that ended in a failure message",
    labelnames=["transport", "error_type"],
)

INBOUND_DROPPED = Counter(
    "parley_inbound_dropped_total",
    "Inbound streaming frames discarded without a timeline entry",
    labelnames=["reason"],
)

CONNECTION_CLOSED = Counter(
    "parley_connection_closed_total",
    "Streaming connections that ended",
    labelnames=["clean"],
)

DISPATCH_LATENCY = Histogram(
    "parley_dispatch_latency_seconds",
    "Time spent inside a transport dispatch call",
    labelnames=["transport"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)
