"""Logging for optsgen runs under go generate.

Console output goes to stderr in the ``optsgen: <file>: <level>: <message>``
shape used by Go tools, so a failing ``go generate`` line names the file it
was processing. A file sink keeps timestamped records for CI logs.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "optsgen"


class DiagnosticFormatter(logging.Formatter):
    """Formats console records as one diagnostic line each."""

    def __init__(self, source: str | None = None, *, verbose: bool = False) -> None:
        super().__init__()
        self.source = source
        self.verbose = verbose

    def format(self, record: logging.LogRecord) -> str:
        parts = [_LOGGER_NAME]
        if self.source:
            parts.append(self.source)
        if self.verbose and record.name != _LOGGER_NAME:
            parts.append(record.name[len(_LOGGER_NAME) + 1 :])
        parts.append(record.levelname.lower())
        line = f"{': '.join(parts)}: {record.getMessage()}"
        if record.exc_info and self.verbose:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the optsgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    source: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach the stderr diagnostic handler and an optional file sink.

    Only warnings and errors reach the console unless ``verbose`` is set; the
    file sink always records DEBUG so a quiet run still leaves a full trace.
    """
    console_level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(DiagnosticFormatter(source, verbose=verbose))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    return logger


__all__ = ["DiagnosticFormatter", "configure_logging", "get_logger"]
