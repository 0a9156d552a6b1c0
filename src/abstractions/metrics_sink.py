from abc import ABC, abstractmethod

from contracts.sample import Sample


class MetricsSink(ABC):
    """
    Abstract base class for time-series stores that persist samples.
    """

    @abstractmethod
    async def ping(self) -> None:
        """
        Best-effort connectivity check.

        Raises:
            SinkConnectError: If the store cannot be reached.
        """

    @abstractmethod
    async def write(self, sample: Sample) -> None:
        """
        Persist a single sample.

        Args:
            sample (Sample): The sample to write.

        Raises:
            SinkWriteError: If the store did not accept the write.
        """

    async def close(self) -> None:
        """
        Release any connections held by the sink.
        """
