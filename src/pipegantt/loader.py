"""Pipeline and configuration loading."""

from __future__ import annotations

from pathlib import Path

from . import context
from .config import CONFIG_FILENAME, PipeganttConfig, load_config
from .logger import get_logger
from .models import Pipeline
from .parser import PipelineParser

logger = get_logger()


def discover_config(
    pipeline_path: Path | str | None = None,
    config_path: Path | None = None,
) -> PipeganttConfig:
    """Discover configuration from various locations.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. pipeline directory / pipegantt_config.yaml
    4. Current directory / pipegantt_config.yaml

    Falls back to the default configuration when nothing is found.
    """
    candidates: list[Path] = []
    if config_path:
        candidates.append(config_path)
    ctx_config = context.get_config_path()
    if ctx_config:
        candidates.append(ctx_config)
    if pipeline_path is not None:
        candidates.append(Path(pipeline_path).parent / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            logger.checks(f"Using config {candidate}")
            return load_config(candidate)

    return PipeganttConfig()


def load_pipeline(path: Path | str) -> Pipeline:
    """Load a pipeline YAML file.

    Parses the file and checks that every ``uses`` names an existing
    workflow. Dependency edges are deliberately left unchecked.

    Raises:
        ParseError: If the file is missing, not YAML, or has the wrong shape
        ValidationError: If the structure fails schema validation
        MissingReferenceError: If a job uses an unknown workflow
    """
    pipeline = PipelineParser().parse_file(path)
    logger.changes(f"Loaded {len(pipeline.workflows)} workflow(s) from {path}")
    return pipeline
