"""Configuration models (pydantic BaseModel)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class LogSection(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class TracingSection(BaseModel):
    """Trace propagation settings."""

    enabled: bool = True
    propagate_baggage: bool = True
    trace_propagation_targets: list[str] = Field(default_factory=lambda: ["localhost", "^/"])
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)


class PropagationConfig(BaseModel):
    """Top-level library configuration."""

    log: LogSection = Field(default_factory=LogSection)
    tracing: TracingSection = Field(default_factory=TracingSection)
