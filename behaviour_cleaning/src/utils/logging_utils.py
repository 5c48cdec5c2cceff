"""Logging setup for the cleaning CLIs.

- Console output goes to stderr; a log file is only created when requested.
- Re-configuring removes previously attached handlers, so notebooks and
  repeated CLI calls do not print every line twice.
- Pipeline modules log under the ``behaviour_cleaning`` namespace; configuring
  that logger (the default here) captures every stage summary.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
PACKAGE_LOGGER_NAME = "behaviour_cleaning"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    logger_name: Optional[str] = PACKAGE_LOGGER_NAME,
    *,
    force: bool = True,
) -> logging.Logger:
    """Configure and return a logger.

    Parameters
    ----------
    level:
        Log level, as an int or a name such as ``"DEBUG"``.
    log_file:
        Optional log file. A directory (existing, or given with a trailing
        slash) gets ``<logger_name>.log`` inside it.
    logger_name:
        Logger to configure; ``None`` configures the root logger.
    force:
        Remove existing handlers first (default True).
    """
    level = _resolve_level(level)
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    console_handler = logging.StreamHandler(stream=sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        if log_path.is_dir() or str(log_file).endswith(("/", "\\")):
            name = (logger_name or "root").replace("/", "_")
            log_path = log_path / f"{name}.log"

        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Keep records from also reaching the root logger's handlers.
    logger.propagate = False
    return logger


__all__ = ["configure_logging", "DEFAULT_LOG_FORMAT", "PACKAGE_LOGGER_NAME"]
