import logging

from abstractions.metrics_sink import MetricsSink
from contracts.sample import Sample

logger = logging.getLogger(__name__)


class LogSink(MetricsSink):
    """
    Sink that only logs samples. Useful when no time-series store is available.
    """

    async def ping(self) -> None:
        logger.debug("LogSink is always reachable")

    async def write(self, sample: Sample) -> None:
        latency = "n/a" if sample.latency_ms is None else f"{sample.latency_ms:.3f} ms"
        logger.info(
            f"[Sample] time={sample.time.isoformat()} "
            f"type={sample.measurement_type} latency={latency}"
        )
