"""
Sink factory for creating metrics sink instances.
"""
import logging
from typing import Optional

from abstractions.metrics_sink import MetricsSink
from config.config import Config
from core.influxdb_sink import InfluxDBSink
from core.log_sink import LogSink

logger = logging.getLogger(__name__)

SUPPORTED_SINK_TYPES = ["influxdb", "log"]


class SinkFactory:
    """
    Factory class for creating metrics sink instances.
    """

    @staticmethod
    def create_sink(sink_type: Optional[str] = None, **kwargs) -> MetricsSink:
        """
        Create a metrics sink based on configuration.

        Args:
            sink_type (Optional[str]): Type of sink ("influxdb" or "log").
                                       If None, uses Config.SINK_TYPE.
            **kwargs: Overrides for the InfluxDB settings (url, database,
                      measurement, username, password, timeout).

        Returns:
            MetricsSink: A sink instance.

        Raises:
            ValueError: If the sink type is unsupported or its settings are
                        invalid. Unlike a failed write this is not recoverable.
        """
        sink_type = (sink_type or Config.SINK_TYPE).lower()
        logger.info(f"Creating {sink_type} sink")

        if sink_type == "influxdb":
            return InfluxDBSink(
                url=kwargs.get("url") or Config.INFLUXDB_URL,
                database=kwargs.get("database") or Config.INFLUXDB_DB,
                measurement=kwargs.get("measurement") or Config.INFLUXDB_MEASUREMENT,
                username=kwargs.get("username", Config.INFLUXDB_USERNAME),
                password=kwargs.get("password", Config.INFLUXDB_PASSWORD),
                timeout=kwargs.get("timeout") or Config.INFLUXDB_TIMEOUT_SECONDS,
                transport=kwargs.get("transport"),
            )

        elif sink_type == "log":
            return LogSink()

        raise ValueError(
            f"Unsupported sink type: {sink_type}. "
            f"Supported types: {SUPPORTED_SINK_TYPES}"
        )
