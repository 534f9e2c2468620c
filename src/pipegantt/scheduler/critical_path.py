"""Critical path method pass over a workflow's dependency graph.

Jobs are visited with Kahn's algorithm: a FIFO queue seeded with every job
that has no prerequisites (in node definition order), a job's start time is
the latest finish among its direct prerequisites, and successors join the
queue once all of their prerequisites are done.

The pass itself knows nothing about ``uses`` references; it asks a duration
callback for every job it visits (see ``DurationResolver``).
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import TYPE_CHECKING

from pipegantt.logger import changes_enabled, debug_enabled, get_logger
from pipegantt.models import ScheduledJob

from .core import CycleDetected, ExcludedJob, ExclusionReason, Resolution, ScheduleResult

if TYPE_CHECKING:
    from pipegantt.models import Job

    from .graph import DependencyGraph

logger = get_logger()

DurationCallback = Callable[["Job"], Resolution]


def start_time(job_id: str, prereqs: dict[str, list[str]], finish: dict[str, float]) -> float:
    """Start of a job: 0 without prerequisites, else the slowest prerequisite's finish."""
    preds = prereqs.get(job_id, [])
    if not preds:
        return 0
    return max(finish.get(p, 0) for p in preds)


def run_kahn(
    graph: DependencyGraph, duration_of: DurationCallback
) -> ScheduleResult | CycleDetected:
    """Schedule every reachable job of ``graph``.

    Scheduled jobs are returned in visitation order, not sorted by start.
    Jobs the queue never reaches are reported in ``ScheduleResult.excluded``.
    A ``CycleDetected`` from the duration callback stops the pass and is
    returned as is.
    """
    in_degree = dict(graph.in_degree)
    queue = deque(graph.ready_jobs())
    finish: dict[str, float] = {}
    scheduled: list[ScheduledJob] = []

    trace = debug_enabled()
    if trace:
        logger.debug(f"Initial queue: {list(queue)}")

    while queue:
        job_id = queue.popleft()
        job = graph.job_by_id.get(job_id)
        if job is None:
            # Only known from an edge
            continue

        resolution = duration_of(job)
        if isinstance(resolution, CycleDetected):
            return resolution

        start = start_time(job_id, graph.prereqs, finish)
        end = start + resolution.duration
        finish[job_id] = end
        scheduled.append(ScheduledJob(id=job_id, start=start, end=end, uses=job.uses))
        if changes_enabled():
            logger.changes(f"Scheduled {job_id}: [{start}, {end}]")

        for succ in graph.successors.get(job_id, []):
            in_degree[succ] = in_degree.get(succ, 0) - 1
            if in_degree[succ] == 0:
                queue.append(succ)
                if trace:
                    logger.debug(f"{succ} is ready")

    return ScheduleResult(jobs=scheduled, excluded=classify_excluded(graph, set(finish)))


def classify_excluded(graph: DependencyGraph, scheduled_ids: set[str]) -> list[ExcludedJob]:
    """Explain why each job outside ``scheduled_ids`` was never reached."""
    pending = [job_id for job_id in graph.job_by_id if job_id not in scheduled_ids]
    pending_set = set(pending)
    excluded: list[ExcludedJob] = []

    for job_id in pending:
        dangling = graph.dangling_prereqs(job_id)
        if dangling:
            item = ExcludedJob(
                job_id,
                ExclusionReason.DANGLING,
                f"needs unknown job(s): {', '.join(dangling)}",
            )
        elif _on_cycle(job_id, graph, pending_set):
            item = ExcludedJob(job_id, ExclusionReason.CYCLE, "part of a dependency cycle")
        else:
            waits_on = [p for p in graph.prereqs.get(job_id, []) if p in pending_set]
            item = ExcludedJob(
                job_id,
                ExclusionReason.BLOCKED,
                f"waits on excluded job(s): {', '.join(waits_on)}",
            )
        logger.changes(f"Excluded {job_id} ({item.reason.value}): {item.detail}")
        excluded.append(item)

    return excluded


def _on_cycle(job_id: str, graph: DependencyGraph, pending: set[str]) -> bool:
    """Check whether ``job_id`` can reach itself through unscheduled jobs."""
    stack = [s for s in graph.successors.get(job_id, []) if s in pending]
    seen: set[str] = set()

    while stack:
        current = stack.pop()
        if current == job_id:
            return True
        if current in seen:
            continue
        seen.add(current)
        stack.extend(s for s in graph.successors.get(current, []) if s in pending)

    return False
