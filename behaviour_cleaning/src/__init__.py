"""Source package for the behavioural dataset cleaning project.

Package layout
--------------
- cleaning: column roles, pruning, missing-record filter, imputation, pipeline
- data: raw CSV loading and a dataset check CLI
- utils: logging setup

This ``__init__`` imports nothing so that ``import behaviour_cleaning.src``
stays cheap.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "cleaning",
    "data",
    "utils",
]
