import os

from contracts.sample import MEASUREMENT_TYPE as DEFAULT_MEASUREMENT_TYPE


def _optional_float(name):
    value = os.environ.get(name)
    return float(value) if value else None


def _optional_int(name):
    value = os.environ.get(name)
    return int(value) if value else None


class Config:
    """
    Configuration class for environment variables and default settings.
    """

    MONITOR_INTERVAL_SECONDS = int(os.environ.get("MONITOR_INTERVAL_SECONDS", "5"))
    LATENCY_HOST = os.environ.get("LATENCY_HOST", "google.com")
    # No timeout unless configured; ping -c 4 normally finishes in ~3s
    PROBE_TIMEOUT_SECONDS = _optional_float("PROBE_TIMEOUT_SECONDS")
    MEASUREMENT_TYPE = os.environ.get("MEASUREMENT_TYPE", DEFAULT_MEASUREMENT_TYPE)

    # Sink selection: "influxdb" or "log"
    SINK_TYPE = os.environ.get("SINK_TYPE", "influxdb")

    INFLUXDB_URL = os.environ.get("INFLUXDB_URL", "http://influxdb:8086")
    INFLUXDB_DB = os.environ.get("INFLUXDB_DB", "internet_metrics")
    INFLUXDB_MEASUREMENT = os.environ.get("INFLUXDB_MEASUREMENT", "internet_metrics")
    INFLUXDB_USERNAME = os.environ.get("INFLUXDB_USERNAME")
    INFLUXDB_PASSWORD = os.environ.get("INFLUXDB_PASSWORD")
    INFLUXDB_TIMEOUT_SECONDS = float(os.environ.get("INFLUXDB_TIMEOUT_SECONDS", "5"))

    # Prometheus exposition is off unless a port is given
    METRICS_PORT = _optional_int("METRICS_PORT")
