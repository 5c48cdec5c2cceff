"""Rule-based cleaning pipeline for tabular behavioural datasets.

Stages (each a pure function returning a new :class:`Dataset`):

1) :func:`classify` assigns every column a :class:`Role` from its name;
2) :func:`prune` drops redundant / duplicate-transformed columns;
3) :func:`filter_missing` drops (or tags) rows whose behavioural block is absent;
4) :func:`impute` fills nulls per role (behavioural -> 0, demographic -> policy).

:func:`run` chains them and returns ``(clean_dataset, manifest)``.
"""

from __future__ import annotations

from .classifier import classify, columns_with_role, summarize_roles
from .config import (
    DEFAULT_BEHAVIORAL_LEXICON,
    CleaningConfig,
    DemographicStrategy,
    FilterMode,
    load_cleaning_config,
)
from .dataset import Column, ColumnType, Dataset, Role, Schema
from .errors import (
    CleaningError,
    ConfigError,
    DataValidationError,
    InsufficientDataError,
    PolicyError,
)
from .imputation import ImputationPolicy, Strategy, check_target, impute
from .manifest import Manifest, ManifestEntry
from .missing_filter import filter_missing
from .pipeline import run
from .pruner import DEFAULT_EXCLUDE_ROLES, prune

__all__ = [
    # data model
    "Column",
    "ColumnType",
    "Dataset",
    "Role",
    "Schema",
    # configuration
    "CleaningConfig",
    "DemographicStrategy",
    "FilterMode",
    "DEFAULT_BEHAVIORAL_LEXICON",
    "load_cleaning_config",
    # stages
    "classify",
    "columns_with_role",
    "summarize_roles",
    "prune",
    "DEFAULT_EXCLUDE_ROLES",
    "filter_missing",
    "impute",
    "check_target",
    "ImputationPolicy",
    "Strategy",
    "run",
    # audit
    "Manifest",
    "ManifestEntry",
    # errors
    "CleaningError",
    "ConfigError",
    "DataValidationError",
    "PolicyError",
    "InsufficientDataError",
]
