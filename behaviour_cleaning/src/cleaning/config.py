"""Pipeline configuration and its YAML loader.

The YAML file holds a single ``cleaning:`` block, e.g.

.. code-block:: yaml

    cleaning:
      missing_indicator_column: Missing_Daily_Transactions
      target_column: RG_case
      behavioral_lexicon: [casino, liveaction, fixedodds]
      demographic_impute_strategy: mean

Unknown keys are ignored with a warning. Unlike model hyper-parameters, a
broken cleaning config is never replaced by defaults: an unreadable file or an
invalid value raises :class:`ConfigError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

import yaml

from .dataset import Role
from .errors import ConfigError


DEFAULT_CONFIG_PATH = Path("behaviour_cleaning/configs/cleaning.yaml")

# Game-category tokens that mark a column as measuring betting activity.
DEFAULT_BEHAVIORAL_LEXICON: FrozenSet[str] = frozenset({"casino", "liveaction", "fixedodds"})


class FilterMode(str, Enum):
    DROP = "drop"
    TAG = "tag"


class DemographicStrategy(str, Enum):
    NONE = "none"
    MEAN = "mean"
    MODE = "mode"
    CONSTANT = "constant"


@dataclass(frozen=True)
class CleaningConfig:
    """Validated options for one pipeline run.

    Attributes
    ----------
    missing_indicator_column:
        Name of the 0/1 column flagging an absent behavioural block (required).
    target_column:
        Name of the label column (required). It is never pruned or imputed.
    behavioral_lexicon:
        Substrings (case-insensitive) identifying behavioural columns.
    identifier_columns:
        Exact names of identifier columns; they are never imputed.
    demographic_impute_strategy / constant_value:
        Fill rule for demographic nulls. With ``mean`` or ``mode``, a non-null
        ``constant_value`` doubles as the fallback for empty columns.
    """

    missing_indicator_column: Optional[str] = None
    target_column: Optional[str] = None
    behavioral_lexicon: FrozenSet[str] = DEFAULT_BEHAVIORAL_LEXICON
    identifier_columns: Tuple[str, ...] = ()
    drop_redundant: bool = True
    drop_duplicate_transformed: bool = True
    missing_record_mode: FilterMode = FilterMode.DROP
    demographic_impute_strategy: DemographicStrategy = DemographicStrategy.NONE
    constant_value: Any = None

    def __post_init__(self) -> None:
        # Normalise loosely typed inputs (plain strings, lists) once, up front.
        object.__setattr__(
            self, "missing_record_mode", _as_enum(FilterMode, self.missing_record_mode, "missing_record_mode")
        )
        object.__setattr__(
            self,
            "demographic_impute_strategy",
            _as_enum(DemographicStrategy, self.demographic_impute_strategy, "demographic_impute_strategy"),
        )
        if self.behavioral_lexicon is not None:
            if isinstance(self.behavioral_lexicon, str):
                raise ConfigError("behavioral_lexicon must be a list of substrings, not a single string.")
            object.__setattr__(
                self, "behavioral_lexicon", frozenset(str(t) for t in self.behavioral_lexicon)
            )
        if isinstance(self.identifier_columns, str):
            raise ConfigError("identifier_columns must be a list of column names.")
        object.__setattr__(self, "identifier_columns", tuple(str(c) for c in self.identifier_columns))

    def validate(self) -> "CleaningConfig":
        """Raise :class:`ConfigError` if a required or consistent option is missing."""
        if not self.missing_indicator_column:
            raise ConfigError("missing_indicator_column is required.")
        if not self.target_column:
            raise ConfigError("target_column is required.")
        if self.missing_indicator_column == self.target_column:
            raise ConfigError(
                "missing_indicator_column and target_column must differ "
                f"(both are '{self.target_column}')."
            )
        if not self.behavioral_lexicon:
            raise ConfigError("behavioral_lexicon must contain at least one substring.")
        if any(not token for token in self.behavioral_lexicon):
            raise ConfigError("behavioral_lexicon entries must be non-empty strings.")
        if self.target_column in self.identifier_columns:
            raise ConfigError(f"Target column '{self.target_column}' cannot also be an identifier.")
        if (
            self.demographic_impute_strategy is DemographicStrategy.CONSTANT
            and self.constant_value is None
        ):
            raise ConfigError("demographic_impute_strategy 'constant' requires constant_value.")
        return self

    def exclude_roles(self) -> FrozenSet[Role]:
        roles = set()
        if self.drop_redundant:
            roles.add(Role.REDUNDANT_DERIVED)
        if self.drop_duplicate_transformed:
            roles.add(Role.DUPLICATE_TRANSFORMED)
        return frozenset(roles)

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any],
        logger: Optional[logging.Logger] = None,
    ) -> "CleaningConfig":
        """Build a config from a plain mapping (e.g. the parsed YAML block)."""
        logger = logger or logging.getLogger(__name__)
        valid_fields = {f.name for f in fields(cls)}

        unknown = sorted(k for k in raw if k not in valid_fields)
        if unknown:
            logger.warning("Ignoring unknown cleaning config keys: %s", unknown)

        kwargs: Dict[str, Any] = {k: v for k, v in raw.items() if k in valid_fields}

        for key in ("drop_redundant", "drop_duplicate_transformed"):
            if key in kwargs:
                kwargs[key] = _as_bool(kwargs[key], key)
        if kwargs.get("identifier_columns") is None:
            kwargs.pop("identifier_columns", None)

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "missing_indicator_column": self.missing_indicator_column,
            "target_column": self.target_column,
            "behavioral_lexicon": sorted(self.behavioral_lexicon),
            "identifier_columns": list(self.identifier_columns),
            "drop_redundant": self.drop_redundant,
            "drop_duplicate_transformed": self.drop_duplicate_transformed,
            "missing_record_mode": self.missing_record_mode.value,
            "demographic_impute_strategy": self.demographic_impute_strategy.value,
            "constant_value": self.constant_value,
        }

    def updated(self, **changes: Any) -> "CleaningConfig":
        return replace(self, **changes)


def _as_bool(x: Any, key: str) -> bool:
    if isinstance(x, bool):
        return x
    if isinstance(x, (int, float)) and x in (0, 1):
        return bool(x)
    if isinstance(x, str):
        value = x.strip().lower()
        if value in {"1", "true", "t", "yes", "y", "on"}:
            return True
        if value in {"0", "false", "f", "no", "n", "off"}:
            return False
    raise ConfigError(f"Option '{key}' expects a boolean, got {x!r}.")


def _as_enum(enum_cls: Any, value: Any, key: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as exc:
        choices = [m.value for m in enum_cls]
        raise ConfigError(f"Option '{key}' must be one of {choices}, got {value!r}.") from exc


def load_cleaning_config(
    config_path: Path = DEFAULT_CONFIG_PATH,
    logger: Optional[logging.Logger] = None,
) -> CleaningConfig:
    """Load and validate :class:`CleaningConfig` from a YAML file."""
    logger = logger or logging.getLogger(__name__)
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Cleaning config file not found at {config_path}.")

    try:
        cfg_dict = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse cleaning config {config_path}: {exc}") from exc

    if not isinstance(cfg_dict, dict):
        raise ConfigError(f"Cleaning config {config_path} must be a mapping.")

    block = cfg_dict.get("cleaning", cfg_dict) or {}
    if not isinstance(block, dict):
        raise ConfigError(f"'cleaning' block in {config_path} must be a mapping.")

    config = CleaningConfig.from_mapping(block, logger).validate()
    logger.info("Loaded cleaning config from %s", config_path)
    return config


__all__ = [
    "CleaningConfig",
    "DemographicStrategy",
    "FilterMode",
    "DEFAULT_BEHAVIORAL_LEXICON",
    "DEFAULT_CONFIG_PATH",
    "load_cleaning_config",
]
