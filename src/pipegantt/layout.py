"""Row layout for timeline rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .logger import checks_enabled, get_logger

if TYPE_CHECKING:
    from .models import ScheduledJob

logger = get_logger()

Interval = tuple[float, float]


def _overlaps(start: float, end: float, row: list[Interval]) -> bool:
    """Half-open interval intersection against everything already in a row."""
    return any(start < row_end and row_start < end for row_start, row_end in row)


def assign_rows(jobs: list[ScheduledJob]) -> dict[str, int]:
    """Assign each job a row so that no two jobs in a row overlap.

    Jobs are placed longest first (ties keep input order), each into the
    lowest row with room for its ``[start, end)`` interval, opening a new
    row when none fits. A row is reused whenever the job does not overlap
    anything already in it, regardless of what higher rows hold.

    Row scratch state lives only for the duration of this call. With
    duplicate ids, the last job placed determines the id's row.

    Returns:
        Mapping of job id to row index (0 is the top row)
    """
    ordered = sorted(jobs, key=lambda job: job.end - job.start, reverse=True)
    rows: list[list[Interval]] = []
    result: dict[str, int] = {}
    trace = checks_enabled()

    for job in ordered:
        for index, row in enumerate(rows):
            if not _overlaps(job.start, job.end, row):
                row.append((job.start, job.end))
                result[job.id] = index
                if trace:
                    logger.checks(f"{job.id} fits in row {index}")
                break
        else:
            rows.append([(job.start, job.end)])
            result[job.id] = len(rows) - 1
            if trace:
                logger.checks(f"{job.id} opens row {len(rows) - 1}")

    logger.changes(f"Packed {len(ordered)} job(s) into {len(rows)} row(s)")
    return result


def row_count(rows: dict[str, int]) -> int:
    """Number of rows used by an assignment from ``assign_rows``."""
    return max(rows.values(), default=-1) + 1


def timeline_order(jobs: list[ScheduledJob]) -> list[ScheduledJob]:
    """Jobs in chronological display order: by start, ties broken by id."""
    return sorted(jobs, key=lambda job: (job.start, job.id))
