"""
Parsing of the round-trip summary line printed by ping.

Two dialects are recognised:

    Linux (iputils):  rtt min/avg/max/mdev = 10.123/15.456/20.789/2.345 ms
    macOS/BSD:        round-trip min/avg/max/stddev = 5.0/6.0/7.0/1.0 ms
"""
import math
import re

from contracts.errors import NoMatchError, NumericFormatError

RTT_SUMMARY_PATTERN = re.compile(
    r"(?:rtt|round-trip).* = ([^/\s]+)/([^/\s]+)/([^/\s]+)/([^/\s]+?) ?ms"
)
# Plain ASCII decimal; float() alone also takes "1_5" and non-ASCII digits
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_ping_output(raw_text: str) -> float:
    """
    Extract the average round-trip latency in milliseconds.

    The whole text is searched once; the second of the four slash-separated
    fields is the average.

    Raises:
        NoMatchError: No summary line in either dialect.
        NumericFormatError: The average field is not a usable number.
    """
    match = RTT_SUMMARY_PATTERN.search(raw_text or "")
    if match is None:
        raise NoMatchError("Failed to parse ping output: no rtt/round-trip summary line")

    avg_text = match.group(2)
    if DECIMAL_PATTERN.fullmatch(avg_text) is None:
        raise NumericFormatError(avg_text)
    avg = float(avg_text)
    # "1e999" overflows to inf
    if not math.isfinite(avg) or avg < 0:
        raise NumericFormatError(avg_text)
    return avg
