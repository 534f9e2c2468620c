"""Command-line interface for pipegantt."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from . import context
from .config import DurationFormat, JobOrder, PipeganttConfig
from .exceptions import PipeganttError
from .layout import assign_rows, timeline_order
from .loader import discover_config, load_pipeline
from .logger import setup_logger
from .models import Pipeline, Workflow
from .scheduler import (
    ScheduleResult,
    critical_path_duration,
    has_missing_durations,
    missing_duration_jobs,
    schedule_workflow,
)
from .timeline import SECONDS_PER_HOUR, format_time, render_timeline

app = typer.Typer(
    name="pipegantt",
    help="Critical path scheduling and timeline layout for pipeline workflows",
    add_completion=False,
)

FileArgument = Annotated[Path, typer.Argument(help="Path to the pipeline YAML file")]
WorkflowOption = Annotated[
    str | None,
    typer.Option("--workflow", "-w", help="Workflow name (default: first in the file)"),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: pipegantt_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for pipegantt commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _load(file: Path) -> tuple[Pipeline, PipeganttConfig]:
    try:
        return load_pipeline(file), discover_config(file)
    except (PipeganttError, FileNotFoundError) as e:
        raise _fail(str(e)) from None


def _select_workflow(pipeline: Pipeline, name: str | None) -> tuple[str, Workflow]:
    if name is None:
        if not pipeline.workflows:
            raise _fail("Pipeline defines no workflows")
        name = pipeline.workflow_names[0]
    workflow = pipeline.get_workflow(name)
    if workflow is None:
        raise _fail(
            f"Unknown workflow '{name}'. Available: {', '.join(pipeline.workflow_names)}"
        )
    return name, workflow


def _schedule(workflow: Workflow, pipeline: Pipeline, config: PipeganttConfig) -> ScheduleResult:
    try:
        result = schedule_workflow(workflow, pipeline)
    except PipeganttError as e:
        raise _fail(str(e)) from None

    if result.excluded and config.scheduler.warn_excluded:
        typer.echo("\nWarnings:", err=True)
        for item in result.excluded:
            typer.echo(
                f"  - {item.job_id} not scheduled ({item.reason.value}): {item.detail}",
                err=True,
            )
    return result


@app.command()
def schedule(file: FileArgument, workflow: WorkflowOption = None) -> None:
    """Compute start/end times and timeline rows for a workflow."""
    pipeline, config = _load(file)
    name, selected = _select_workflow(pipeline, workflow)
    result = _schedule(selected, pipeline, config)

    rows = assign_rows(result.jobs)
    fmt = config.timeline.duration_format
    include_hours = result.span >= SECONDS_PER_HOUR
    jobs = timeline_order(result.jobs) if config.timeline.order == JobOrder.START else result.jobs

    typer.echo(f"Schedule for {name}")
    typer.echo("=" * 60)
    for job in jobs:
        line = (
            f"{job.id}: {format_time(job.start, fmt, include_hours)}"
            f" - {format_time(job.end, fmt, include_hours)}  row {rows[job.id]}"
        )
        if job.uses:
            line += f"  (uses {job.uses})"
        typer.echo(line)
    typer.echo(f"Total: {format_time(result.span, fmt, include_hours)}")


@app.command(name="critical-path")
def critical_path(
    file: FileArgument,
    workflow: WorkflowOption = None,
    raw: Annotated[bool, typer.Option("--raw", help="Print a plain number")] = False,
) -> None:
    """Print the total span of a workflow."""
    pipeline, config = _load(file)
    name, _ = _select_workflow(pipeline, workflow)
    try:
        duration = critical_path_duration(name, pipeline)
    except PipeganttError as e:
        raise _fail(str(e)) from None

    fmt = DurationFormat.RAW if raw else config.timeline.duration_format
    typer.echo(format_time(duration, fmt, duration >= SECONDS_PER_HOUR))


@app.command()
def check(file: FileArgument, workflow: WorkflowOption = None) -> None:
    """Report workflows whose job durations cannot all be determined."""
    pipeline, _ = _load(file)
    names = [_select_workflow(pipeline, workflow)[0]] if workflow else pipeline.workflow_names

    any_missing = False
    for name in names:
        selected = pipeline.workflows[name]
        if has_missing_durations(selected, pipeline):
            any_missing = True
            jobs = ", ".join(missing_duration_jobs(selected, pipeline))
            typer.echo(f"{name}: missing durations ({jobs})")
        else:
            typer.echo(f"{name}: ok")

    if any_missing:
        raise typer.Exit(1)


@app.command()
def timeline(
    file: FileArgument,
    workflow: WorkflowOption = None,
    *,
    width: Annotated[
        int | None, typer.Option("--width", help="Chart width in characters", min=10)
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Render a text timeline of a workflow."""
    pipeline, config = _load(file)
    name, selected = _select_workflow(pipeline, workflow)

    if has_missing_durations(selected, pipeline):
        raise _fail(f"Workflow '{name}' has jobs without a duration; run 'check' for details")

    result = _schedule(selected, pipeline, config)
    timeline_config = config.timeline
    if width is not None:
        timeline_config = timeline_config.model_copy(update={"width": width})
    rendered = render_timeline(result.jobs, timeline_config)

    if output:
        output.write_text(rendered, encoding="utf-8")
        typer.echo(f"Timeline written to {output}")
    else:
        typer.echo(rendered, nl=False)


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
