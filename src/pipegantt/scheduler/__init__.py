"""Scheduler package - critical path scheduling of pipeline workflows.

This package provides:
- Dependency graph construction for one workflow (build_graph)
- A critical path method pass using Kahn's algorithm (run_kahn)
- Duration resolution through nested ``uses`` references, with a per-request
  memo table and workflow cycle detection (DurationResolver)
- A completeness check for job durations (has_missing_durations)

Main entry points:
- calculate_scheduled_jobs: Start/end time per job of a workflow
- schedule_workflow: Same, plus the jobs that could not be scheduled and why
- critical_path_duration: Total span of a named workflow
- has_missing_durations: Whether every duration can be determined
"""

from .completeness import has_missing_durations, missing_duration_jobs
from .core import (
    CycleDetected,
    ExcludedJob,
    ExclusionReason,
    Resolution,
    Resolved,
    ScheduleResult,
)
from .critical_path import run_kahn
from .graph import DependencyGraph, build_graph
from .resolver import DurationResolver
from .service import (
    calculate_scheduled_jobs,
    critical_path_duration,
    resolve_critical_path,
    schedule_workflow,
)

__all__ = [
    "CycleDetected",
    "DependencyGraph",
    "DurationResolver",
    "ExcludedJob",
    "ExclusionReason",
    "Resolution",
    "Resolved",
    "ScheduleResult",
    "build_graph",
    "calculate_scheduled_jobs",
    "critical_path_duration",
    "has_missing_durations",
    "missing_duration_jobs",
    "resolve_critical_path",
    "run_kahn",
    "schedule_workflow",
]
