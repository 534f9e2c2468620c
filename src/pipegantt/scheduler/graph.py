"""Dependency graph construction for a single workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pipegantt.models import Edge, Job


def _default_adjacency() -> dict[str, list[str]]:
    return {}


def _default_in_degree() -> dict[str, int]:
    return {}


def _default_jobs() -> dict[str, Job]:
    return {}


@dataclass
class DependencyGraph:
    """Adjacency and in-degree maps for Kahn's topological traversal.

    Edge direction: source -> target means "source is a prerequisite of target".
    Ids that only appear in edges get adjacency and in-degree entries but no
    entry in ``job_by_id``.
    """

    prereqs: dict[str, list[str]] = field(default_factory=_default_adjacency)
    successors: dict[str, list[str]] = field(default_factory=_default_adjacency)
    in_degree: dict[str, int] = field(default_factory=_default_in_degree)
    job_by_id: dict[str, Job] = field(default_factory=_default_jobs)

    def ready_jobs(self) -> list[str]:
        """Job ids with no unmet prerequisites, in node definition order."""
        return [
            job_id
            for job_id, degree in self.in_degree.items()
            if degree == 0 and job_id in self.job_by_id
        ]

    def dangling_prereqs(self, job_id: str) -> list[str]:
        """Prerequisite ids of ``job_id`` that name no job in the workflow."""
        return [p for p in self.prereqs.get(job_id, []) if p not in self.job_by_id]


def build_graph(nodes: list[Job], edges: list[Edge]) -> DependencyGraph:
    """Build prerequisite/successor adjacency and in-degree counts.

    No validation is performed. An edge naming an unknown id still bumps the
    target's in-degree, which can leave the target permanently unreachable.
    For duplicate job ids the first occurrence fixes the position and the
    last occurrence's fields win.
    """
    graph = DependencyGraph()

    for node in nodes:
        graph.prereqs[node.id] = []
        graph.successors[node.id] = []
        graph.in_degree[node.id] = 0
        graph.job_by_id[node.id] = node

    for edge in edges:
        graph.prereqs.setdefault(edge.target, []).append(edge.source)
        graph.successors.setdefault(edge.source, []).append(edge.target)
        graph.in_degree[edge.target] = graph.in_degree.get(edge.target, 0) + 1

    return graph
