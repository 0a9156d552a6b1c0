import logging
import time
from datetime import datetime, timezone
from typing import Optional

from contracts.errors import ParseError, ProbeError
from contracts.sample import Sample
from contracts.target import TargetConfig
from core.monitor_metrics import MonitorMetrics
from core.ping_parser import parse_ping_output
from core.probe_runner import ProbeRunner
from core.profiler import Profiler

logger = logging.getLogger(__name__)


class MeasurementCycle:
    """
    Runs one probe against the configured target and turns the outcome into a
    Sample. execute() never raises: a failed probe or unreadable output yields
    a Sample without latency.
    """

    def __init__(
        self,
        target: TargetConfig,
        probe_runner: Optional[ProbeRunner] = None,
        measurement_type: Optional[str] = None,
        metrics: Optional[MonitorMetrics] = None,
    ):
        self.target = target
        self.probe_runner = probe_runner or ProbeRunner(
            count=target.probe_count, timeout=target.probe_timeout_seconds
        )
        self.measurement_type = measurement_type or target.measurement_type
        self.metrics = metrics

    async def measure_latency(self) -> float:
        raw_text = await self.probe_runner.run(self.target.host)
        return parse_ping_output(raw_text)

    @Profiler.profile
    async def execute(self) -> Sample:
        host = self.target.host
        logger.info(f"Measuring latency to {host}")
        start = time.perf_counter()
        latency = None
        try:
            latency = await self.measure_latency()
            logger.info(f"Latency: {latency:.2f} ms")
        except ProbeError as e:
            logger.warning(f"Failed to measure latency to {host}: {e}")
            self._record_failure("probe")
        except ParseError as e:
            logger.warning(f"Failed to read latency to {host}: {e}")
            self._record_failure("parse")
        except Exception as e:
            logger.error(f"Unexpected error measuring latency to {host}: {e}", exc_info=True)
            self._record_failure("unexpected")
        finally:
            if self.metrics:
                self.metrics.CYCLE_SECONDS.observe(time.perf_counter() - start)

        if latency is not None and self.metrics:
            self.metrics.record_latency(latency)
        return Sample(
            time=datetime.now(timezone.utc),
            measurement_type=self.measurement_type,
            latency_ms=latency,
        )

    def _record_failure(self, reason: str):
        if self.metrics:
            self.metrics.record_failure(reason)

    def close(self):
        self.probe_runner.close()
