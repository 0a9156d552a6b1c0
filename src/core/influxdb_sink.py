import logging
from typing import Optional

import httpx

from abstractions.metrics_sink import MetricsSink
from contracts.errors import SinkConnectError, SinkWriteError
from contracts.sample import Sample
from core.line_protocol import format_sample

logger = logging.getLogger(__name__)


class InfluxDBSink(MetricsSink):
    """
    Writes samples to an InfluxDB 1.x server over its HTTP API.
    """

    def __init__(
        self,
        url: str,
        database: str,
        measurement: str = "internet_metrics",
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the InfluxDBSink.

        Args:
            url (str): Base URL of the server, e.g. http://influxdb:8086.
            database (str): Target database.
            measurement (str): Series name the samples are written under.
            username (Optional[str]): Basic-auth user; requires password.
            password (Optional[str]): Basic-auth password; requires username.
            timeout (float): Per-request timeout in seconds.
            transport: Optional httpx transport, used by tests.

        Raises:
            ValueError: Invalid URL or only one of username/password given.
        """
        if (username is None) != (password is None):
            raise ValueError("InfluxDB username and password must be given together")
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid InfluxDB URL {url!r}: {e}") from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ValueError(f"Invalid InfluxDB URL {url!r}")

        self.url = url
        self.database = database
        self.measurement = measurement
        auth = (username, password) if username is not None else None
        self._client = httpx.AsyncClient(
            base_url=url, auth=auth, timeout=timeout, transport=transport
        )
        logger.info(f"InfluxDBSink initialized for {url} (db={database})")

    async def ping(self) -> None:
        try:
            resp = await self._client.get("/ping")
        except httpx.HTTPError as e:
            raise SinkConnectError(f"Could not reach InfluxDB at {self.url}: {e}") from e
        if not resp.is_success:
            raise SinkConnectError(
                f"InfluxDB ping returned status={resp.status_code}: {resp.text}"
            )

    async def write(self, sample: Sample) -> None:
        line = format_sample(self.measurement, sample)
        logger.debug(f"Writing line: {line}")
        try:
            resp = await self._client.post(
                "/write",
                params={"db": self.database, "precision": "ms"},
                content=line.encode("utf-8"),
            )
        except httpx.HTTPError as e:
            raise SinkWriteError(f"Could not write to InfluxDB at {self.url}: {e}") from e
        if not resp.is_success:
            raise SinkWriteError(
                f"InfluxDB rejected write: status={resp.status_code}: {resp.text}"
            )

    async def close(self) -> None:
        await self._client.aclose()
