import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MEASUREMENT_TYPE = "internet_performance"


class Sample(BaseModel):
    """
    One timestamped latency observation. latency_ms is None when the
    measurement failed.
    """

    model_config = ConfigDict(frozen=True)

    time: datetime
    measurement_type: str = Field(default=MEASUREMENT_TYPE, min_length=1)
    latency_ms: Optional[float] = None

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: datetime) -> datetime:
        # A naive time would be read as local time when converted to epoch
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("time must be timezone-aware")
        return value.astimezone(timezone.utc)

    @field_validator("latency_ms")
    @classmethod
    def _check_latency(cls, value):
        if value is not None and (not math.isfinite(value) or value < 0):
            raise ValueError("latency_ms must be a finite, non-negative number")
        return value

    @property
    def succeeded(self) -> bool:
        return self.latency_ms is not None
