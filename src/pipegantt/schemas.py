"""Pydantic schemas for pipeline YAML validation."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, field_validator


class JobSchema(BaseModel):
    """Schema for a single job."""

    duration: float | None = None
    uses: str | None = None
    needs: list[str] = Field(default_factory=list)

    @field_validator("duration", mode="before")
    @classmethod
    def ensure_number(cls, v: Any) -> Any:
        """Reject strings, booleans, infinities and NaN; durations must be plain numbers."""
        if v is None:
            return None
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"duration must be a number, got {v!r}")
        if not math.isfinite(v):
            raise ValueError(f"duration must be finite, got {v!r}")
        return v

    @field_validator("uses", mode="before")
    @classmethod
    def ensure_name(cls, v: Any) -> Any:
        """Workflow names written as bare numbers are names too."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("needs", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Accept a single job id as well as a list."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]


def _string_keys(v: Any) -> Any:
    """YAML turns keys such as ``1`` or ``2024`` into numbers; ids are strings."""
    if isinstance(v, dict):
        return {str(key): value for key, value in v.items()}  # type: ignore[misc]
    return v


class WorkflowSchema(BaseModel):
    """Schema for a workflow: jobs keyed by id, in definition order."""

    jobs: dict[str, JobSchema | None] | None = None

    @field_validator("jobs", mode="before")
    @classmethod
    def ensure_job_ids(cls, v: Any) -> Any:
        """Job ids are strings, whatever YAML made of them."""
        return _string_keys(v)


class PipelineSchema(BaseModel):
    """Schema for the entire pipeline YAML document."""

    workflows: dict[str, WorkflowSchema | None]

    @field_validator("workflows", mode="before")
    @classmethod
    def ensure_workflow_names(cls, v: Any) -> Any:
        """Workflow names are strings, whatever YAML made of them."""
        return _string_keys(v)
