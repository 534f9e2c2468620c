"""Plain-text timeline rendering for scheduled jobs."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .config import DurationFormat, JobOrder, TimelineConfig
from .layout import assign_rows, row_count, timeline_order

if TYPE_CHECKING:
    from .models import ScheduledJob

NICE_INTERVALS = [
    1, 2, 5, 10, 15, 30, 60, 120, 300, 600, 900, 1800, 3600, 7200, 14400, 28800, 86400,
]  # fmt: skip
TARGET_TICKS = 5
SECONDS_PER_HOUR = 3600
ROW_PREFIX_WIDTH = 5  # "NNN |"
LEAF_FILL = "="
COMPOSITE_FILL = "#"


def format_duration(seconds: float, include_hours: bool) -> str:
    """Format seconds as ``m:ss``, or ``h:mm:ss`` when ``include_hours`` is set."""
    s = math.floor(seconds + 0.5)
    sec = f"{s % 60:02d}"
    if include_hours:
        return f"{s // 3600}:{(s % 3600) // 60:02d}:{sec}"
    return f"{s // 60}:{sec}"


def format_time(value: float, duration_format: DurationFormat, include_hours: bool) -> str:
    """Format a time or duration according to the configured format."""
    if duration_format == DurationFormat.RAW:
        return f"{value:g}"
    return format_duration(value, include_hours)


def nice_tick_interval(raw_max: float) -> int:
    """Smallest round interval giving at most about five ticks."""
    rough = raw_max / TARGET_TICKS
    for interval in NICE_INTERVALS:
        if interval >= rough:
            return interval
    return NICE_INTERVALS[-1]


def axis_ticks(raw_max: float) -> list[float]:
    """Tick positions from 0 to ``raw_max``.

    The last tick snaps to ``raw_max`` when it is within half an interval of
    it; otherwise ``raw_max`` gets its own tick.
    """
    if raw_max <= 0:
        return [0]
    interval = nice_tick_interval(raw_max)
    count = math.floor(raw_max / interval)
    ticks: list[float] = [i * interval for i in range(count + 1)]
    if ticks[-1] != raw_max:
        if len(ticks) > 1 and raw_max - ticks[-1] < interval / 2:
            ticks[-1] = raw_max
        else:
            ticks.append(raw_max)
    return ticks


def _axis_lines(raw_max: float, scale: float, config: TimelineConfig) -> list[str]:
    include_hours = raw_max >= SECONDS_PER_HOUR
    rule = ["-"] * config.width
    labels = [" "] * config.width
    next_free = 0

    for tick in axis_ticks(raw_max):
        col = min(config.width - 1, int(tick * scale + 0.5))
        rule[col] = "+"
        text = format_time(tick, config.duration_format, include_hours)
        # End label is right-aligned on its tick
        pos = max(0, col - len(text) + 1) if tick == raw_max and tick > 0 else col
        if pos < next_free:
            continue
        labels[pos : pos + len(text)] = list(text)
        next_free = pos + len(text) + 1

    pad = " " * ROW_PREFIX_WIDTH
    return [pad + "".join(labels).rstrip(), pad + "".join(rule)]


def _draw_bar(canvas: list[str], job: ScheduledJob, scale: float) -> None:
    width = len(canvas)
    first = min(width - 1, int(job.start * scale + 0.5))
    last = max(first + 1, min(width, int(job.end * scale + 0.5)))
    fill = COMPOSITE_FILL if job.uses else LEAF_FILL
    for col in range(first, last):
        canvas[col] = fill
    if len(job.id) <= last - first - 2:
        canvas[first + 1 : first + 1 + len(job.id)] = list(job.id)


def render_timeline(jobs: list[ScheduledJob], config: TimelineConfig | None = None) -> str:
    """Render scheduled jobs as a text timeline.

    One line per row from ``assign_rows``, bars scaled to ``config.width``
    characters. Composite (``uses``) jobs are drawn with ``#``, leaves with
    ``=``. A listing of every job follows the chart.
    """
    config = config or TimelineConfig()
    if not jobs:
        return "No scheduled jobs.\n"

    rows = assign_rows(jobs)
    raw_max = max(job.end for job in jobs)
    scale = config.width / (raw_max if raw_max > 0 else 1)
    include_hours = raw_max >= SECONDS_PER_HOUR

    lines = _axis_lines(raw_max, scale, config)

    canvases = [[" "] * config.width for _ in range(row_count(rows))]
    for job in jobs:
        _draw_bar(canvases[rows[job.id]], job, scale)
    for index, canvas in enumerate(canvases):
        lines.append(f"{index:>3} |{''.join(canvas)}|")

    lines.append("")
    listing = timeline_order(jobs) if config.order == JobOrder.START else jobs
    id_width = max(len(job.id) for job in jobs)
    for job in listing:
        start = format_time(job.start, config.duration_format, include_hours)
        end = format_time(job.end, config.duration_format, include_hours)
        duration = format_time(job.duration, config.duration_format, include_hours)
        line = f"  {job.id:<{id_width}}  {start} - {end}  ({duration})  row {rows[job.id]}"
        if job.uses:
            line += f"  uses {job.uses}"
        lines.append(line)

    return "\n".join(lines) + "\n"
