"""
Serialisation of samples into InfluxDB line protocol.
"""
from contracts.sample import Sample


def _escape_measurement(value: str) -> str:
    return value.replace("\\", "\\\\").replace(",", r"\,").replace(" ", r"\ ")


def _escape_tag(value: str) -> str:
    return value.replace("\\", "\\\\").replace(",", r"\,").replace("=", r"\=").replace(" ", r"\ ")


def to_epoch_ms(sample: Sample) -> int:
    return round(sample.time.timestamp() * 1000)


def format_sample(measurement: str, sample: Sample) -> str:
    """
    Render one sample as a line-protocol record with millisecond precision.

    A point needs at least one field, so the boolean ``ok`` field is always
    written and ``latency_ms`` only when it is present.
    """
    tags = f"measurement_type={_escape_tag(sample.measurement_type)}"
    if sample.succeeded:
        fields = f"latency_ms={float(sample.latency_ms)!r},ok=true"
    else:
        fields = "ok=false"
    return f"{_escape_measurement(measurement)},{tags} {fields} {to_epoch_ms(sample)}"
