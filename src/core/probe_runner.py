import asyncio
import logging
import os
import subprocess
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from contracts.errors import NonZeroExitError, ProbeTimeoutError, SpawnFailedError
from contracts.target import PROBE_COUNT

logger = logging.getLogger(__name__)


class ProbeRunner:
    """
    Runs the system ping utility against a host and returns its raw output.

    subprocess.run blocks, so every invocation is handed to a single dedicated
    worker thread and awaited; the event loop stays responsive while at most
    one ping is in flight.
    """

    def __init__(
        self,
        count: int = PROBE_COUNT,
        timeout: Optional[float] = None,
        ping_binary: str = "ping",
    ):
        """
        Initialize the ProbeRunner.

        Args:
            count (int): Number of echo requests per probe.
            timeout (Optional[float]): Seconds before the subprocess is killed.
                None waits for ping to finish on its own.
            ping_binary (str): Name or path of the ping executable.
        """
        self.count = count
        self.timeout = timeout
        self.ping_binary = ping_binary
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ping-probe")

    def build_command(self, host: str) -> List[str]:
        return [self.ping_binary, "-c", str(self.count), host]

    def _run_blocking(self, host: str) -> str:
        cmd = self.build_command(host)
        # C locale keeps the summary line in the format the parser expects
        env = {**os.environ, "LC_ALL": "C"}
        logger.debug(f"Executing {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                env=env,
                shell=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeTimeoutError(host, self.timeout) from e
        except OSError as e:
            raise SpawnFailedError(self.ping_binary, e) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise NonZeroExitError(result.returncode, stderr)
        return result.stdout

    async def run(self, host: str) -> str:
        """
        Ping host and return the captured stdout.

        Raises:
            SpawnFailedError: ping could not be started.
            NonZeroExitError: ping exited with a nonzero status.
            ProbeTimeoutError: the configured timeout elapsed.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self._run_blocking, host)

    def close(self):
        self._executor.shutdown(wait=False)
