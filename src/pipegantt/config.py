"""Configuration file support (pipegantt_config.yaml).

Configuration only affects presentation and reporting; the scheduling
and layout algorithms take none.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError

CONFIG_FILENAME = "pipegantt_config.yaml"
MIN_TIMELINE_WIDTH = 10


class DurationFormat(str, Enum):
    """How times and durations are printed."""

    CLOCK = "clock"  # Seconds as m:ss or h:mm:ss
    RAW = "raw"  # Plain numbers


class JobOrder(str, Enum):
    """Listing order of jobs in reports."""

    START = "start"  # Chronological, ties broken by id
    VISIT = "visit"  # Scheduler visitation order


class TimelineConfig(BaseModel):
    """Configuration for timeline rendering."""

    width: int = 72
    duration_format: DurationFormat = DurationFormat.CLOCK
    order: JobOrder = JobOrder.START

    @field_validator("width")
    @classmethod
    def check_width(cls, v: int) -> int:
        """Ensure the chart is wide enough to draw."""
        if v < MIN_TIMELINE_WIDTH:
            raise ValueError(f"timeline.width must be at least {MIN_TIMELINE_WIDTH}, got {v}")
        return v


class SchedulerReportConfig(BaseModel):
    """Configuration for scheduling reports."""

    warn_excluded: bool = True  # Report jobs the scheduler could not place


class PipeganttConfig(BaseModel):
    """Top-level configuration."""

    timeline: TimelineConfig = Field(default_factory=TimelineConfig)
    scheduler: SchedulerReportConfig = Field(default_factory=SchedulerReportConfig)


def load_config(config_path: Path | str) -> PipeganttConfig:
    """Load configuration from a YAML file.

    An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the config is not valid YAML or fails validation
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config {config_path}: {e}") from e

    if data is None:
        return PipeganttConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the root level")

    try:
        return PipeganttConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
