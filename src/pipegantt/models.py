"""Data models for pipegantt."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Job:
    """A job inside a workflow.

    A job is in exactly one of three states:
    - leaf with an explicit duration
    - composite, deriving its duration from the workflow named by ``uses``
    - leaf with unknown duration (neither field set)

    If both ``duration`` and ``uses`` are given, the explicit duration wins.
    """

    id: str
    duration: float | None = None
    uses: str | None = None


@dataclass(frozen=True)
class Edge:
    """Dependency edge: ``source`` must complete before ``target`` starts."""

    source: str
    target: str


def _default_job_list() -> list[Job]:
    return []


def _default_edge_list() -> list[Edge]:
    return []


@dataclass(frozen=True)
class Workflow:
    """A single DAG of jobs.

    Job ids are expected to be unique within a workflow; this is not enforced.
    ``scheduler.build_graph`` decides what a repeated id means.
    """

    nodes: list[Job] = field(default_factory=_default_job_list)
    edges: list[Edge] = field(default_factory=_default_edge_list)


def _default_workflows() -> dict[str, Workflow]:
    return {}


@dataclass(frozen=True)
class Pipeline:
    """Named workflows; insertion order is the iteration and tie-break order."""

    workflows: dict[str, Workflow] = field(default_factory=_default_workflows)

    def get_workflow(self, name: str) -> Workflow | None:
        """Get a workflow by name."""
        return self.workflows.get(name)

    @property
    def workflow_names(self) -> list[str]:
        """Workflow names in definition order."""
        return list(self.workflows)


@dataclass(frozen=True)
class ScheduledJob:
    """A job with a computed start and end time.

    ``uses`` is carried through unchanged so consumers can drill into the
    referenced workflow.
    """

    id: str
    start: float
    end: float
    uses: str | None = None

    @property
    def duration(self) -> float:
        """Resolved duration of the job."""
        return self.end - self.start
