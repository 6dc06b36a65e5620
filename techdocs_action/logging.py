"""Logging for the techdocs action, rendered as GitHub workflow commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "techdocs"

# INFO has no workflow command and is printed as plain step output.
_WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class WorkflowCommandFormatter(logging.Formatter):
    """Turns DEBUG, WARNING and ERROR records into `::debug::`, `::warning::`
    and `::error::` lines the Actions runner understands.

    A `file` attribute on the record (``extra={"file": path}``) becomes the
    annotation's file property so the runner can link the failing descriptor.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _WORKFLOW_COMMANDS.get(record.levelno)
        if command is None:
            return message
        properties = ""
        file = getattr(record, "file", None)
        if file and command != "debug":
            properties = f" file={escape_property(str(file))}"
        return f"::{command}{properties}::{escape_data(message)}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the techdocs hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    workflow_commands: bool = True,
) -> logging.Logger:
    """Configure the techdocs logger.

    Console output goes to stdout as workflow commands, where the runner
    picks them up, or to stderr with a plain prefix for local runs.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if workflow_commands:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(WorkflowCommandFormatter("%(message)s"))
    else:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("[techdocs] %(levelname)s %(message)s"))
    console.setLevel(level)
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = [
    "WorkflowCommandFormatter",
    "configure_logging",
    "escape_data",
    "escape_property",
    "get_logger",
]
