"""Diagnostic logging setup (not the audit log, see core/audit.py)."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "TableOPS_V1"


def setup_logger(
    name: str = ROOT_LOGGER,
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return the package logger.

    Module loggers (``TableOPS_V1.core.engine``...) propagate to it, so one
    call from the entry point is enough.

    Args:
        name: Logger name.
        level: Logging level, as an int or a name such as ``"INFO"``.
        log_file: Optional path to a log file. If None, logs to stderr only.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level)
    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)
