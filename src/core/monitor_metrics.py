import logging
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server

logger = logging.getLogger(__name__)


class MonitorMetrics:
    """
    Prometheus metrics describing the measurement loop itself.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize the metrics on a private registry so that several instances
        (e.g. in tests) never collide on the process-wide default registry.
        """
        self.registry = registry or CollectorRegistry()
        self.TICKS = Counter(
            "internet_monitor_ticks",
            "Number of measurement ticks run",
            registry=self.registry,
        )
        self.MEASUREMENT_FAILURES = Counter(
            "internet_monitor_measurement_failures",
            "Measurements that produced no latency, by reason",
            ["reason"],
            registry=self.registry,
        )
        self.SINK_WRITE_FAILURES = Counter(
            "internet_monitor_sink_write_failures",
            "Samples the sink did not accept",
            registry=self.registry,
        )
        self.LAST_LATENCY = Gauge(
            "internet_monitor_last_latency_ms",
            "Most recent average latency in milliseconds",
            registry=self.registry,
        )
        self.CYCLE_SECONDS = Histogram(
            "internet_monitor_cycle_seconds",
            "Duration of one measurement cycle in seconds",
            registry=self.registry,
        )

    def record_latency(self, latency_ms: float):
        self.LAST_LATENCY.set(latency_ms)

    def record_failure(self, reason: str):
        self.MEASUREMENT_FAILURES.labels(reason=reason).inc()

    def serve(self, port: int):
        start_http_server(port, registry=self.registry)
        logger.info(f"Prometheus metrics exposed on port {port}")
