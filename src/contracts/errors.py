class MonitorError(Exception):
    """
    Base class for every recoverable error raised on the measurement path.
    """


class ProbeError(MonitorError):
    """
    The ping subprocess could not produce usable output.
    """


class SpawnFailedError(ProbeError):
    def __init__(self, command: str, cause: OSError):
        self.command = command
        self.cause = cause
        super().__init__(f"Failed to spawn {command}: {cause}")


class NonZeroExitError(ProbeError):
    def __init__(self, returncode: int, stderr: str):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Ping command failed (exit {returncode}): {stderr}")


class ProbeTimeoutError(ProbeError):
    def __init__(self, host: str, timeout: float):
        self.host = host
        self.timeout = timeout
        super().__init__(f"Ping to {host} did not finish within {timeout}s")


class ParseError(MonitorError):
    """
    The ping output did not contain a usable round-trip summary.
    """


class NoMatchError(ParseError):
    pass


class NumericFormatError(ParseError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Failed to parse average latency {value!r} as float")


class SinkError(MonitorError):
    pass


class SinkConnectError(SinkError):
    pass


class SinkWriteError(SinkError):
    pass
