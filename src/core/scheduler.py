import asyncio
import enum
import logging
from typing import Optional

from abstractions.metrics_sink import MetricsSink
from contracts.errors import SinkWriteError
from core.measurement_cycle import MeasurementCycle
from core.monitor_metrics import MonitorMetrics
from core.profiler import Profiler

logger = logging.getLogger(__name__)


class SchedulerState(enum.Enum):
    WAITING = "waiting"
    RUNNING = "running"


class MeasurementScheduler:
    """
    Drives the measurement loop: measure, write, sleep for the interval, repeat.

    The interval is slept after each tick finishes, so the period is the
    interval plus the time the tick took. Ticks never overlap and samples reach
    the sink in tick order.
    """

    def __init__(
        self,
        cycle: MeasurementCycle,
        sink: MetricsSink,
        interval: float,
        metrics: Optional[MonitorMetrics] = None,
    ):
        """
        Initialize the MeasurementScheduler.

        Args:
            cycle (MeasurementCycle): Produces one sample per tick.
            sink (MetricsSink): Receives every sample.
            interval (float): Seconds to sleep between ticks.
            metrics (Optional[MonitorMetrics]): Loop metrics, if enabled.
        """
        self.cycle = cycle
        self.sink = sink
        self.interval = interval
        self.metrics = metrics
        self.iteration = 0
        self.state = SchedulerState.WAITING
        self._running = False

    async def check_sink(self) -> bool:
        """
        Best-effort connectivity check; a failure is logged and ignored.
        """
        try:
            await self.sink.ping()
        except Exception as e:
            logger.warning(f"Could not ping sink, but will try to write anyway: {e}")
            return False
        logger.info("Successfully connected to sink")
        return True

    @Profiler.profile
    async def tick(self):
        self.state = SchedulerState.RUNNING
        self.iteration += 1
        logger.info(f"Starting measurement iteration {self.iteration}")
        if self.metrics:
            self.metrics.TICKS.inc()
        try:
            try:
                sample = await self.cycle.execute()
            except Exception as e:
                logger.error(f"Failed to run measurements: {e}", exc_info=True)
                return
            try:
                await self.sink.write(sample)
                logger.info("Successfully wrote sample to sink")
            except SinkWriteError as e:
                logger.error(f"Failed to write sample to sink: {e}")
                self._record_write_failure()
            except Exception as e:
                logger.error(f"Unexpected error writing sample to sink: {e}", exc_info=True)
                self._record_write_failure()
        finally:
            self.state = SchedulerState.WAITING

    def _record_write_failure(self):
        if self.metrics:
            self.metrics.SINK_WRITE_FAILURES.inc()

    async def run(self):
        """
        Run ticks until stop() is called. Under normal operation that never
        happens and the loop runs for the lifetime of the process.
        """
        self._running = True
        logger.info(f"Starting measurement loop with interval of {self.interval} seconds")
        await self.check_sink()
        while self._running:
            await self.tick()
            if not self._running:
                break
            logger.info(
                f"Completed measurement iteration {self.iteration}. "
                f"Sleeping for {self.interval} seconds..."
            )
            await asyncio.sleep(self.interval)
            logger.debug(f"Woke up from sleep after iteration {self.iteration}")
        logger.info("Measurement loop stopped.")

    def stop(self):
        """
        Let the loop exit once the current tick or sleep finishes.
        """
        self._running = False
