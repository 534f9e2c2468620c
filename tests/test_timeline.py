"""Tests for text timeline rendering."""

import pytest

from pipegantt.config import DurationFormat, JobOrder, TimelineConfig
from pipegantt.models import ScheduledJob
from pipegantt.timeline import (
    axis_ticks,
    format_duration,
    format_time,
    nice_tick_interval,
    render_timeline,
)


class TestFormatting:
    """Test duration and tick helpers."""

    @pytest.mark.parametrize(
        ("seconds", "include_hours", "expected"),
        [
            (0, False, "0:00"),
            (75, False, "1:15"),
            (59.6, False, "1:00"),
            (0.5, False, "0:01"),
            (3600, False, "60:00"),
            (3661, True, "1:01:01"),
            (7322, True, "2:02:02"),
        ],
    )
    def test_format_duration(self, seconds: float, include_hours: bool, expected: str) -> None:
        """Seconds render as m:ss or h:mm:ss."""
        assert format_duration(seconds, include_hours) == expected

    def test_format_time_raw(self) -> None:
        """Raw format prints plain numbers."""
        assert format_time(30.0, DurationFormat.RAW, False) == "30"
        assert format_time(2.5, DurationFormat.RAW, False) == "2.5"

    def test_nice_tick_interval(self) -> None:
        """The first round interval covering a fifth of the span is chosen."""
        assert nice_tick_interval(0) == 1
        assert nice_tick_interval(40) == 10
        assert nice_tick_interval(100) == 30
        assert nice_tick_interval(10**7) == 86400

    def test_axis_ticks_snap_to_end(self) -> None:
        """A last tick close to the end moves onto it."""
        assert axis_ticks(100) == [0, 30, 60, 100]

    def test_axis_ticks_append_end(self) -> None:
        """A last tick far from the end gets the end added after it."""
        assert axis_ticks(80) == [0, 30, 60, 80]

    def test_axis_ticks_exact(self) -> None:
        """An end on a tick is not duplicated."""
        assert axis_ticks(40) == [0, 10, 20, 30, 40]

    def test_axis_ticks_degenerate(self) -> None:
        """Zero and tiny spans keep the origin tick."""
        assert axis_ticks(0) == [0]
        assert axis_ticks(0.3) == [0, 0.3]


class TestRenderTimeline:
    """Test render_timeline."""

    @pytest.fixture
    def jobs(self) -> list[ScheduledJob]:
        """A long bar, two halves under it and a trailing job."""
        return [
            ScheduledJob("long", 0, 30),
            ScheduledJob("left", 0, 15),
            ScheduledJob("right", 15, 30),
            ScheduledJob("gap", 35, 40),
        ]

    @pytest.fixture
    def raw_config(self) -> TimelineConfig:
        """Forty columns, one per time unit, plain numbers."""
        return TimelineConfig(width=40, duration_format=DurationFormat.RAW)

    def test_empty(self) -> None:
        """Nothing to draw gives a notice."""
        assert render_timeline([]) == "No scheduled jobs.\n"

    def test_rows(self, jobs: list[ScheduledJob], raw_config: TimelineConfig) -> None:
        """Bars are drawn into their packed rows with ids inside."""
        lines = render_timeline(jobs, raw_config).splitlines()

        assert lines[2] == "  0 |" + "=long" + "=" * 25 + " " * 5 + "=gap=" + "|"
        assert lines[3] == "  1 |" + "=left" + "=" * 10 + "=right" + "=" * 9 + " " * 10 + "|"

    def test_axis(self, jobs: list[ScheduledJob], raw_config: TimelineConfig) -> None:
        """The axis marks ticks and labels both ends."""
        lines = render_timeline(jobs, raw_config).splitlines()

        assert lines[0] == "     0         10        20        30      40"
        assert lines[1] == "     +---------+---------+---------+--------+"

    def test_listing_in_chronological_order(
        self, jobs: list[ScheduledJob], raw_config: TimelineConfig
    ) -> None:
        """Jobs are listed by start time, ties by id."""
        lines = render_timeline(jobs, raw_config).splitlines()

        assert lines[4] == ""
        assert lines[5:] == [
            "  left   0 - 15  (15)  row 1",
            "  long   0 - 30  (30)  row 0",
            "  right  15 - 30  (15)  row 1",
            "  gap    35 - 40  (5)  row 0",
        ]

    def test_listing_in_visit_order(self, jobs: list[ScheduledJob]) -> None:
        """The visit order setting keeps input order."""
        config = TimelineConfig(width=40, duration_format=DurationFormat.RAW, order=JobOrder.VISIT)

        lines = render_timeline(jobs, config).splitlines()

        assert [line.split()[0] for line in lines[5:]] == ["long", "left", "right", "gap"]

    def test_composite_jobs_use_distinct_fill(self) -> None:
        """Jobs with uses are drawn with a different character."""
        jobs = [ScheduledJob("prep", 0, 10), ScheduledJob("deploy", 10, 20, uses="release")]

        output = render_timeline(jobs, TimelineConfig(width=20))

        assert "#deploy#" in output
        assert "uses release" in output

    def test_clock_format(self) -> None:
        """The default format prints m:ss."""
        output = render_timeline([ScheduledJob("build", 0, 90)], TimelineConfig(width=20))

        assert "  build  0:00 - 1:30  (1:30)  row 0" in output

    def test_short_bars_are_unlabelled(self) -> None:
        """Ids that do not fit inside a bar are left out of the chart."""
        jobs = [ScheduledJob("main", 0, 100), ScheduledJob("tiny", 100, 101)]

        lines = render_timeline(jobs, TimelineConfig(width=20)).splitlines()

        assert "tiny" not in lines[2]
        assert "main" in lines[2]
