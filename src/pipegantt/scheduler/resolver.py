"""Duration resolution through nested workflow references."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipegantt.logger import get_logger

from .core import CycleDetected, Resolution, Resolved, ScheduleResult
from .critical_path import run_kahn
from .graph import build_graph

if TYPE_CHECKING:
    from pipegantt.models import Job, Pipeline, Workflow

logger = get_logger()


class DurationResolver:
    """Resolves job durations for a single top-level scheduling request.

    A job's duration is its explicit ``duration``; failing that, the critical
    path of the workflow named by ``uses``; failing that, 0.

    The resolver keeps two pieces of per-request state:
    - a memo table of workflow name -> critical path, so a sub-workflow
      referenced many times is scheduled once
    - the chain of workflow names currently being resolved, so a ``uses``
      reference back into that chain yields ``CycleDetected`` instead of
      recursing forever

    Create a new resolver per request; instances are not meant to be shared.
    """

    def __init__(self, pipeline: Pipeline):
        self.pipeline = pipeline
        self._memo: dict[str, float] = {}
        self._path: list[str] = []

    def job_duration(self, job: Job) -> Resolution:
        """Resolve the duration of one job."""
        if job.duration is not None:
            return Resolved(job.duration)
        if job.uses is None:
            logger.checks(f"{job.id} has no duration, treating it as 0")
            return Resolved(0)
        logger.checks(f"{job.id} uses workflow '{job.uses}'")
        with logger.nested():
            return self.resolve(job.uses)

    def resolve(self, workflow_name: str) -> Resolution:
        """Critical path of the named workflow (0 when the name is unknown)."""
        workflow = self.pipeline.get_workflow(workflow_name)
        if workflow is None:
            logger.checks(f"Unknown workflow '{workflow_name}', duration 0")
            return Resolved(0)

        if workflow_name in self._memo:
            logger.debug(f"Memo hit for '{workflow_name}'")
            return Resolved(self._memo[workflow_name])

        if workflow_name in self._path:
            cycle = (*self._path[self._path.index(workflow_name) :], workflow_name)
            logger.checks(f"Workflow cycle: {' -> '.join(cycle)}")
            return CycleDetected(cycle)

        self._path.append(workflow_name)
        outcome = self.schedule(workflow)
        self._path.pop()

        if isinstance(outcome, CycleDetected):
            return outcome

        self._memo[workflow_name] = outcome.span
        logger.checks(f"Workflow '{workflow_name}' critical path: {outcome.span}")
        return Resolved(outcome.span)

    def schedule(self, workflow: Workflow) -> ScheduleResult | CycleDetected:
        """Run the critical path pass over ``workflow`` using this resolver."""
        graph = build_graph(workflow.nodes, workflow.edges)
        return run_kahn(graph, self.job_duration)
