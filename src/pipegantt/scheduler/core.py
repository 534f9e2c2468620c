"""Core result types for the scheduling system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from pipegantt.models import ScheduledJob


@dataclass(frozen=True)
class Resolved:
    """A workflow's critical path was computed."""

    duration: float


@dataclass(frozen=True)
class CycleDetected:
    """A ``uses`` chain re-entered a workflow already being resolved.

    ``path`` starts and ends with the re-entered workflow name.
    """

    path: tuple[str, ...]


Resolution = Union[Resolved, CycleDetected]


class ExclusionReason(str, Enum):
    """Why the topological pass never reached a job."""

    DANGLING = "dangling"  # Has a prerequisite id that is not a job in the workflow
    CYCLE = "cycle"  # Sits on a dependency cycle
    BLOCKED = "blocked"  # Waits, directly or not, on another excluded job


@dataclass(frozen=True)
class ExcludedJob:
    """A job left out of the schedule."""

    job_id: str
    reason: ExclusionReason
    detail: str = ""


def _default_scheduled() -> list[ScheduledJob]:
    return []


def _default_excluded() -> list[ExcludedJob]:
    return []


@dataclass(frozen=True)
class ScheduleResult:
    """Scheduled jobs in visitation order plus the jobs that could not be placed."""

    jobs: list[ScheduledJob] = field(default_factory=_default_scheduled)
    excluded: list[ExcludedJob] = field(default_factory=_default_excluded)

    @property
    def span(self) -> float:
        """Latest end time among scheduled jobs, or 0 for an empty schedule."""
        return max((job.end for job in self.jobs), default=0)

    @property
    def is_complete(self) -> bool:
        """True when every job in the workflow was scheduled."""
        return not self.excluded
