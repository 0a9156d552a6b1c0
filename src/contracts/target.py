from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contracts.sample import MEASUREMENT_TYPE

PROBE_COUNT = 4


class TargetConfig(BaseModel):
    """
    Data model describing what to ping, how often, and how samples are tagged.
    """

    model_config = ConfigDict(frozen=True)

    host: str
    probe_count: int = PROBE_COUNT
    interval_seconds: float = Field(gt=0)
    probe_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    measurement_type: str = MEASUREMENT_TYPE

    @field_validator("host")
    @classmethod
    def _check_host(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("host must not be empty")
        # Passed positionally to ping, so it must not look like an option.
        if value.startswith("-"):
            raise ValueError(f"invalid host {value!r}")
        return value

    @field_validator("measurement_type")
    @classmethod
    def _check_measurement_type(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("measurement_type must not be empty")
        return value
