"""Small project-wide helpers (logging setup)."""

from __future__ import annotations

from .logging_utils import DEFAULT_LOG_FORMAT, PACKAGE_LOGGER_NAME, configure_logging

__all__ = ["configure_logging", "DEFAULT_LOG_FORMAT", "PACKAGE_LOGGER_NAME"]
