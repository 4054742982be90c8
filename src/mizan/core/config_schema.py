"""Pydantic models for config validation.

Call ``Config.validated()`` to obtain a typed, validated ``MizanConfig``
instance. Existing dict-based access continues to work unchanged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mizan.financial.calculators.schools import School, ThresholdStandard, parse_school, parse_threshold_standard

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ObligationsConfig(BaseModel):
    """Caller-side defaults for obligation calculations."""

    school: School | None = None
    threshold_standard: ThresholdStandard = ThresholdStandard.GOLD
    include_jewelry: bool = False
    include_retirement: bool = False

    @field_validator("school", mode="before")
    @classmethod
    def _parse_school(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return parse_school(v)

    @field_validator("threshold_standard", mode="before")
    @classmethod
    def _parse_standard(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_threshold_standard(v)
        return v


class PricingConfig(BaseModel):
    """Fallback metal prices per gram, used when no live quote is supplied."""

    gold_per_gram: float = Field(default=85.2, ge=0)
    silver_per_gram: float = Field(default=1.0, ge=0)


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in _LOG_LEVELS:
                raise ValueError(f"unknown log level {v!r}, expected one of {list(_LOG_LEVELS)}")
        return v


class MizanConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    obligations: ObligationsConfig = ObligationsConfig()
    pricing: PricingConfig = PricingConfig()
    logging: LoggingConfig = LoggingConfig()
