"""Verbosity-level logging for pipegantt.

Scheduling a workflow can recurse into the workflows its jobs ``use``.
Messages logged while a sub-workflow is being resolved are indented one
step per nesting level, so the output reads as a tree:

    Scheduled build: [0, 10]
    ship uses workflow 'release'
      Scheduled upload: [0, 5]
      Workflow 'release' critical path: 5
    Scheduled ship: [10, 15]
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

CHANGES_LEVEL = 25  # verbosity 1: a job got a start/end time, a row or was excluded
CHECKS_LEVEL = 15  # verbosity 2: duration resolution steps and row fit tests

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3  # queue contents and memo hits

_LEVELS = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}

LOGGER_NAME = "pipegantt"
INDENT = "  "


class PipeganttLogger(logging.Logger):
    """Logger with ``changes``/``checks`` levels and sub-workflow nesting."""

    def __init__(self, name: str, level: int = logging.NOTSET):
        super().__init__(name, level)
        self.depth = 0

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log at verbosity 1."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log at verbosity 2."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Indent everything logged inside the block by one more step."""
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def makeRecord(self, *args: Any, **kwargs: Any) -> logging.LogRecord:
        record = super().makeRecord(*args, **kwargs)
        record.depth = self.depth
        return record


class _NestedFormatter(logging.Formatter):
    """Message-only format, prefixed by the record's nesting depth."""

    def format(self, record: logging.LogRecord) -> str:
        return INDENT * getattr(record, "depth", 0) + super().format(record)


def get_logger() -> PipeganttLogger:
    """Get the pipegantt logger (singleton); configure it with setup_logger()."""
    logging.setLoggerClass(PipeganttLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, PipeganttLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """(Re)configure the pipegantt logger.

    Args:
        verbosity: 0=errors only, 1=changes, 2=checks, 3=debug
        stream: Output stream, sys.stderr when omitted
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVELS.get(verbosity, logging.ERROR))
    logger.depth = 0

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(_NestedFormatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and go back to errors only (used between tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)
    logger.depth = 0


def changes_enabled() -> bool:
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def checks_enabled() -> bool:
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    return get_logger().isEnabledFor(logging.DEBUG)
