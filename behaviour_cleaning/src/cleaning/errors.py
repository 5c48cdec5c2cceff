"""Exception hierarchy for the cleaning pipeline.

Every stage raises one of the four concrete errors below. Each carries enough
context (stage, column, offending rows) for the caller to locate the problem
without inspecting a partially transformed dataset, which is never returned.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Optional, Tuple


class CleaningError(Exception):
    """Base class for all pipeline failures."""

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        column: Optional[str] = None,
        rows: Iterable[Hashable] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.column = column
        self.rows: Tuple[Hashable, ...] = tuple(rows)

    def with_stage(self, stage: str) -> "CleaningError":
        """Attach the failing stage name unless one is already set."""
        if self.stage is None:
            self.stage = stage
        return self

    def __str__(self) -> str:
        parts = [self.message]
        if self.stage is not None:
            parts.append(f"stage={self.stage}")
        if self.column is not None:
            parts.append(f"column={self.column}")
        if self.rows:
            shown = ", ".join(repr(r) for r in self.rows[:10])
            more = f" (+{len(self.rows) - 10} more)" if len(self.rows) > 10 else ""
            parts.append(f"rows=[{shown}]{more}")
        return " | ".join(parts)


class ConfigError(CleaningError, ValueError):
    """Missing or contradictory configuration."""


class DataValidationError(CleaningError, ValueError):
    """A value violates a structural assumption about the data."""


class PolicyError(CleaningError):
    """A categorically forbidden operation was requested."""


class InsufficientDataError(CleaningError):
    """A required statistic cannot be computed and no fallback is configured."""


__all__ = [
    "CleaningError",
    "ConfigError",
    "DataValidationError",
    "PolicyError",
    "InsufficientDataError",
]
