import asyncio
import logging
import sys

import click
from pydantic import ValidationError

from config.config import Config
from config.logging_config import setup_logging
from contracts.target import TargetConfig
from core.measurement_cycle import MeasurementCycle
from core.monitor_metrics import MonitorMetrics
from core.scheduler import MeasurementScheduler
from core.sink_factory import SUPPORTED_SINK_TYPES, SinkFactory

logger = logging.getLogger(__name__)


async def run_monitor(scheduler: MeasurementScheduler):
    try:
        await scheduler.run()
    finally:
        scheduler.cycle.close()
        await scheduler.sink.close()


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-i",
    "--interval",
    type=click.IntRange(min=1),
    default=Config.MONITOR_INTERVAL_SECONDS,
    show_default=True,
    help="Time between runs in seconds.",
)
@click.option("--influxdb-url", default=Config.INFLUXDB_URL, show_default=True, help="InfluxDB URL.")
@click.option("--influxdb-db", default=Config.INFLUXDB_DB, show_default=True, help="InfluxDB database.")
@click.option(
    "--influxdb-measurement",
    default=Config.INFLUXDB_MEASUREMENT,
    show_default=True,
    help="Series the samples are written under.",
)
@click.option("--influxdb-username", default=Config.INFLUXDB_USERNAME, help="InfluxDB username (optional).")
@click.option("--influxdb-password", default=Config.INFLUXDB_PASSWORD, help="InfluxDB password (optional).")
@click.option(
    "--latency-url",
    "latency_host",
    default=Config.LATENCY_HOST,
    show_default=True,
    help="Host to ping for the latency test.",
)
@click.option(
    "--sink",
    "sink_type",
    type=click.Choice(SUPPORTED_SINK_TYPES, case_sensitive=False),
    default=Config.SINK_TYPE,
    show_default=True,
    help="Where samples are written.",
)
@click.option(
    "--probe-timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=Config.PROBE_TIMEOUT_SECONDS,
    help="Kill ping after this many seconds (default: no timeout).",
)
@click.option(
    "--metrics-port",
    type=click.IntRange(min=1, max=65535),
    default=Config.METRICS_PORT,
    help="Expose Prometheus metrics on this port.",
)
def cli(
    interval,
    influxdb_url,
    influxdb_db,
    influxdb_measurement,
    influxdb_username,
    influxdb_password,
    latency_host,
    sink_type,
    probe_timeout,
    metrics_port,
):
    """Periodically measure latency to a host and store it in InfluxDB."""
    setup_logging()
    logger.info(f"Starting internet-monitor with interval of {interval} seconds")

    try:
        target = TargetConfig(
            host=latency_host,
            interval_seconds=interval,
            probe_timeout_seconds=probe_timeout,
            measurement_type=Config.MEASUREMENT_TYPE,
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid target configuration: {e}") from e

    try:
        sink = SinkFactory.create_sink(
            sink_type,
            url=influxdb_url,
            database=influxdb_db,
            measurement=influxdb_measurement,
            username=influxdb_username,
            password=influxdb_password,
        )
    except ValueError as e:
        logger.error(f"Failed to create sink: {e}")
        raise click.ClickException(str(e)) from e

    metrics = None
    if metrics_port:
        metrics = MonitorMetrics()
        metrics.serve(metrics_port)

    cycle = MeasurementCycle(target, metrics=metrics)
    scheduler = MeasurementScheduler(cycle, sink, target.interval_seconds, metrics=metrics)

    try:
        asyncio.run(run_monitor(scheduler))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")
        sys.exit(130)


def main():
    cli()


if __name__ == "__main__":
    main()
