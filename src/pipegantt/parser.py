"""YAML parser for pipeline definitions."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import MissingReferenceError, ParseError, ValidationError
from .models import Edge, Job, Pipeline, Workflow
from .schemas import PipelineSchema, WorkflowSchema


def validate_uses_references(pipeline: Pipeline) -> None:
    """Ensure every ``uses`` names a workflow of the pipeline.

    Raises:
        MissingReferenceError: On the first job that uses an unknown workflow
    """
    for workflow_name, workflow in pipeline.workflows.items():
        for job in workflow.nodes:
            if job.uses is not None and job.uses not in pipeline.workflows:
                raise MissingReferenceError(
                    f'Job "{job.id}" in workflow "{workflow_name}" '
                    f'references unknown workflow "{job.uses}"'
                )


class PipelineParser:
    """Parser for pipeline YAML files.

    Only structure is checked here. ``needs`` entries are turned into edges
    without checking that they name existing jobs.
    """

    def parse_file(self, file_path: Path | str) -> Pipeline:
        """Parse a YAML file into a Pipeline."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        with path.open(encoding="utf-8") as f:
            return self.parse_text(f.read())

    def parse_text(self, text: str) -> Pipeline:
        """Parse YAML text into a Pipeline."""
        try:
            data: Any = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParseError(f"Invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("Expected a YAML object at the top level")
        if not isinstance(data.get("workflows"), dict):
            raise ParseError('Missing "workflows" key')

        return self._parse_data(data)  # type: ignore[arg-type]

    def _parse_data(self, data: dict[str, Any]) -> Pipeline:
        try:
            schema = PipelineSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid pipeline structure: {e}") from e

        workflows = {
            name: self._build_workflow(workflow_schema)
            for name, workflow_schema in schema.workflows.items()
        }
        pipeline = Pipeline(workflows=workflows)
        validate_uses_references(pipeline)
        return pipeline

    def _build_workflow(self, workflow_schema: WorkflowSchema | None) -> Workflow:
        if workflow_schema is None or not workflow_schema.jobs:
            return Workflow()

        nodes: list[Job] = []
        edges: list[Edge] = []

        for job_id, job_schema in workflow_schema.jobs.items():
            if job_schema is None:
                nodes.append(Job(id=job_id))
                continue
            nodes.append(Job(id=job_id, duration=job_schema.duration, uses=job_schema.uses))
            edges.extend(Edge(source=dep, target=job_id) for dep in job_schema.needs)

        return Workflow(nodes=nodes, edges=edges)
