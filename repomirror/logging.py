"""Logging setup shared by the mirror, the catalog writer and the CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import RepoMirrorError

_LOGGER_NAME = "repomirror"
_CONSOLE_FORMAT = "[repomirror] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger for one stage of a run (``mirror``, ``catalog``, ...)."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route run output to stderr and, optionally, to *log_file*.

    Per-file skips are warnings, so they stay visible without ``verbose``;
    debug adds per-directory counts and the list of skipped paths. Raises
    RepoMirrorError when the log file cannot be opened.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated runs in one process must not stack handlers or leak open log files.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file = Path(log_file).expanduser()
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            sink = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            raise RepoMirrorError(f"Could not open log file {log_file}: {exc}") from exc
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


def active_log_file() -> Path | None:
    """Return the file the run is logging to, so the walk can leave it out."""
    for handler in logging.getLogger(_LOGGER_NAME).handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


__all__ = ["active_log_file", "configure_logging", "get_logger"]
