# sio_emitter/infra/metrics/emitter_metrics.py
"""
Emitter Metrics - Prometheus export

Counters and histograms updated by the emitters on every publish attempt.
"""

from prometheus_client import Counter, Histogram


# ============================================================================
# Publish Metrics
# ============================================================================

packets_published_total = Counter(
    'sio_emitter_packets_published_total',
    'Total packets published to the bus',
    ['namespace']
)

publish_errors_total = Counter(
    'sio_emitter_publish_errors_total',
    'Total publish attempts that failed',
    ['namespace', 'error_type']
)

payload_bytes = Histogram(
    'sio_emitter_payload_bytes',
    'Size of published frames in bytes',
    buckets=(64, 256, 1024, 4096, 16384, 65536, 262144, 1048576)
)

publish_latency_seconds = Histogram(
    'sio_emitter_publish_latency_seconds',
    'Latency of the bus publish call',
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5, 1.0)
)


def record_publish(namespace: str, size: int, latency: float) -> None:
    """Record a successful publish"""
    packets_published_total.labels(namespace=namespace).inc()
    payload_bytes.observe(size)
    publish_latency_seconds.observe(latency)


def record_publish_error(namespace: str, error: BaseException) -> None:
    """Record a failed publish"""
    cause = error.__cause__ or error
    publish_errors_total.labels(namespace=namespace, error_type=type(cause).__name__).inc()
