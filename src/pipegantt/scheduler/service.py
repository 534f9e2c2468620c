"""Entry points for scheduling workflows of a pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipegantt.exceptions import WorkflowCycleError
from pipegantt.logger import get_logger

from .core import CycleDetected, Resolution, ScheduleResult
from .resolver import DurationResolver

if TYPE_CHECKING:
    from pipegantt.models import Pipeline, ScheduledJob, Workflow

logger = get_logger()


def schedule_workflow(workflow: Workflow, pipeline: Pipeline) -> ScheduleResult:
    """Schedule a workflow and report the jobs that could not be placed.

    Raises:
        WorkflowCycleError: If a ``uses`` chain re-enters a workflow
    """
    logger.changes(f"Scheduling workflow with {len(workflow.nodes)} job(s)")
    outcome = DurationResolver(pipeline).schedule(workflow)
    if isinstance(outcome, CycleDetected):
        raise WorkflowCycleError(outcome.path)
    return outcome


def calculate_scheduled_jobs(workflow: Workflow, pipeline: Pipeline) -> list[ScheduledJob]:
    """Start/end time for every reachable job, in visitation order.

    Jobs stranded by a dependency cycle or a dangling edge are left out
    silently; use ``schedule_workflow`` to find out which ones.
    """
    return schedule_workflow(workflow, pipeline).jobs


def resolve_critical_path(workflow_name: str, pipeline: Pipeline) -> Resolution:
    """Critical path of a workflow as ``Resolved`` or ``CycleDetected``. Never raises."""
    return DurationResolver(pipeline).resolve(workflow_name)


def critical_path_duration(workflow_name: str, pipeline: Pipeline) -> float:
    """Total span of the named workflow, 0 if no such workflow exists.

    Raises:
        WorkflowCycleError: If a ``uses`` chain re-enters a workflow
    """
    resolution = resolve_critical_path(workflow_name, pipeline)
    if isinstance(resolution, CycleDetected):
        raise WorkflowCycleError(resolution.path)
    return resolution.duration
