"""Custom exceptions for pipegantt."""


class PipeganttError(Exception):
    """Base exception for all pipegantt errors."""

    pass


class ParseError(PipeganttError):
    """Raised when pipeline YAML cannot be read or has the wrong shape."""

    pass


class ValidationError(PipeganttError):
    """Raised when validation fails."""

    pass


class MissingReferenceError(ValidationError):
    """Raised when a job uses a workflow that does not exist."""

    pass


class WorkflowCycleError(ValidationError):
    """Raised when a chain of ``uses`` references re-enters a workflow."""

    def __init__(self, path: tuple[str, ...]):
        self.path = path
        super().__init__(f"Circular workflow reference detected: {' -> '.join(path)}")


class ConfigError(PipeganttError):
    """Raised when a configuration file is invalid."""

    pass
