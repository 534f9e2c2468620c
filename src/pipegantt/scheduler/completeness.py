"""Check whether every job duration in a workflow can be determined."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipegantt.logger import get_logger

if TYPE_CHECKING:
    from pipegantt.models import Job, Pipeline, Workflow

logger = get_logger()


class _CompletenessChecker:
    """Per-call cache of workflow name -> all durations resolvable."""

    def __init__(self, pipeline: Pipeline):
        self.pipeline = pipeline
        self._resolvable: dict[str, bool] = {}
        self._visiting: set[str] = set()

    def job_resolvable(self, job: Job) -> bool:
        if job.duration is not None:
            return True
        if job.uses is None:
            logger.checks(f"{job.id} has neither duration nor uses")
            return False
        with logger.nested():
            return self.workflow_resolvable(job.uses)

    def workflow_resolvable(self, name: str) -> bool:
        if name in self._resolvable:
            return self._resolvable[name]

        workflow = self.pipeline.get_workflow(name)
        if workflow is None:
            logger.checks(f"Workflow '{name}' does not exist")
            return False
        if name in self._visiting:
            logger.checks(f"Workflow '{name}' references itself")
            return False

        self._visiting.add(name)
        result = all(self.job_resolvable(job) for job in workflow.nodes)
        self._visiting.discard(name)

        self._resolvable[name] = result
        return result


def has_missing_durations(workflow: Workflow, pipeline: Pipeline) -> bool:
    """True if any job's duration cannot be determined.

    An explicit duration (0 included) is resolvable. A ``uses`` job is
    resolvable when every job of the referenced workflow is, checked
    transitively. References to unknown workflows and cyclic ``uses`` chains
    count as missing. An empty workflow has nothing missing.
    """
    checker = _CompletenessChecker(pipeline)
    return any(not checker.job_resolvable(job) for job in workflow.nodes)


def missing_duration_jobs(workflow: Workflow, pipeline: Pipeline) -> list[str]:
    """Ids of the jobs in ``workflow`` whose durations cannot be determined."""
    checker = _CompletenessChecker(pipeline)
    return [job.id for job in workflow.nodes if not checker.job_resolvable(job)]
