"""Pytest configuration and fixtures for pipegantt tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from pipegantt import context
from pipegantt.logger import reset_logger
from pipegantt.models import Edge, Job, Pipeline, ScheduledJob, Workflow


def make_workflow(*jobs: Job, edges: list[tuple[str, str]] | None = None) -> Workflow:
    """Build a workflow from jobs and (source, target) pairs."""
    return Workflow(
        nodes=list(jobs),
        edges=[Edge(source=s, target=t) for s, t in edges or []],
    )


def by_id(jobs: list[ScheduledJob]) -> dict[str, ScheduledJob]:
    """Index scheduled jobs by id."""
    return {job.id: job for job in jobs}


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    """Reset the logger and global context between tests."""
    yield
    reset_logger()
    context.set_config_path(None)


@pytest.fixture
def empty_pipeline() -> Pipeline:
    """A pipeline with no workflows."""
    return Pipeline()


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[..., Path]:
    """Write YAML text to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "pipeline.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
