"""Role-specific null imputation.

Policy
------
- ``BehavioralFeature``: zero-fill, always. A missing activity measurement
  means the account did not engage in that game category.
- ``DemographicFeature``: configurable (leave null, mean, mode, or constant).
- ``Target``: never imputed. A null label aborts the run with
  :class:`PolicyError`.
- ``Identifier`` / ``MissingIndicator`` and any surviving derived columns are
  left as-is.

Fill statistics are fitted once per column on the non-null values of the
(already filtered) input, then applied to every null of that column, so two
nulls in one column always receive the same value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.impute import SimpleImputer

from .config import CleaningConfig, DemographicStrategy
from .dataset import ColumnType, Dataset, Role
from .errors import ConfigError, InsufficientDataError, PolicyError

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    ZERO = "zero"
    LEAVE_NULL = "none"
    MEAN = "mean"
    MODE = "mode"
    CONSTANT = "constant"


_DEMOGRAPHIC_TO_STRATEGY = {
    DemographicStrategy.NONE: Strategy.LEAVE_NULL,
    DemographicStrategy.MEAN: Strategy.MEAN,
    DemographicStrategy.MODE: Strategy.MODE,
    DemographicStrategy.CONSTANT: Strategy.CONSTANT,
}


@dataclass(frozen=True)
class ImputationPolicy:
    """Maps each role to a fill strategy.

    Only the demographic strategy is configurable; behavioural columns are
    always zero-filled and the target is never touched. ``constant_value`` is
    the fill value for ``constant`` and the fallback for ``mean``/``mode``
    columns with no observed values.
    """

    demographic: Strategy = Strategy.LEAVE_NULL
    constant_value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "demographic", Strategy(self.demographic))
        if self.demographic is Strategy.ZERO:
            raise ConfigError("Zero-fill is reserved for behavioural columns.")
        if self.demographic is Strategy.CONSTANT and self.constant_value is None:
            raise ConfigError("Constant demographic fill requires constant_value.")

    @classmethod
    def from_config(cls, config: CleaningConfig) -> "ImputationPolicy":
        return cls(
            demographic=_DEMOGRAPHIC_TO_STRATEGY[config.demographic_impute_strategy],
            constant_value=config.constant_value,
        )

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[Role, Union[Strategy, str]],
        constant_value: Any = None,
    ) -> "ImputationPolicy":
        """Build a policy from an explicit role -> strategy mapping.

        Raises :class:`PolicyError` if the mapping tries to override one of the
        fixed rules (target or behavioural columns).
        """
        for role, strategy in mapping.items():
            strategy = Strategy(strategy)
            if role is Role.TARGET and strategy is not Strategy.LEAVE_NULL:
                raise PolicyError("The target column must never be imputed.")
            if role is Role.BEHAVIORAL_FEATURE and strategy is not Strategy.ZERO:
                raise PolicyError("Behavioural columns are always zero-filled.")
            if role not in (Role.TARGET, Role.BEHAVIORAL_FEATURE, Role.DEMOGRAPHIC_FEATURE):
                if strategy is not Strategy.LEAVE_NULL:
                    raise PolicyError(f"Role {role.value} cannot be imputed.")
        demographic = mapping.get(Role.DEMOGRAPHIC_FEATURE, Strategy.LEAVE_NULL)
        return cls(demographic=Strategy(demographic), constant_value=constant_value)

    def strategy_for(self, role: Role) -> Strategy:
        if role is Role.BEHAVIORAL_FEATURE:
            return Strategy.ZERO
        if role is Role.DEMOGRAPHIC_FEATURE:
            return self.demographic
        return Strategy.LEAVE_NULL

    def as_mapping(self) -> Dict[Role, Strategy]:
        return {role: self.strategy_for(role) for role in Role}


def check_target(dataset: Dataset, target_column: str) -> None:
    """Raise :class:`PolicyError` if the target is absent or has any null."""
    if target_column not in dataset.schema:
        raise PolicyError(
            f"Target column '{target_column}' not found in dataset.", column=target_column
        )
    nulls = dataset.frame[target_column].isna()
    if nulls.any():
        rows = list(dataset.frame.index[nulls])
        raise PolicyError(
            f"Target column '{target_column}' contains {len(rows)} null value(s); "
            "the label is never imputed.",
            column=target_column,
            rows=rows,
        )


def _fit_statistic(series: pd.Series, strategy: Strategy, declared_type: ColumnType) -> Any:
    """Fit the mean or mode on the non-null population of ``series``."""
    observed = series.dropna()
    if strategy is Strategy.MEAN and declared_type is ColumnType.NUMERIC:
        imputer = SimpleImputer(strategy="mean")
        imputer.fit(observed.to_numpy(dtype=float).reshape(-1, 1))
        return float(imputer.statistics_[0])

    # Mode, and mean requested on a non-numeric column (no mean exists).
    imputer = SimpleImputer(strategy="most_frequent", missing_values=None)
    imputer.fit(observed.to_numpy(dtype=object).reshape(-1, 1))
    value = imputer.statistics_[0]
    return value.item() if isinstance(value, np.generic) else value


def resolve_fill_value(
    series: pd.Series,
    strategy: Strategy,
    declared_type: ColumnType,
    constant_value: Any = None,
) -> Any:
    """Return the single value used to fill every null of ``series``."""
    if strategy is Strategy.ZERO:
        return 0
    if strategy is Strategy.CONSTANT:
        return constant_value

    if series.notna().sum() == 0:
        if constant_value is not None:
            logger.warning(
                "Column %r has no observed values; falling back to constant %r",
                series.name,
                constant_value,
            )
            return constant_value
        raise InsufficientDataError(
            f"Cannot compute {strategy.value} for column '{series.name}': no non-null values "
            "and no constant_value fallback configured.",
            column=str(series.name),
        )
    return _fit_statistic(series, strategy, declared_type)


def impute(
    dataset: Dataset,
    role_map: Mapping[str, Role],
    policy: ImputationPolicy,
    target_column: Optional[str] = None,
) -> Tuple[Dataset, Dict[str, int]]:
    """Fill nulls column by column according to ``policy``.

    Returns
    -------
    (dataset, filled)
        ``filled`` maps each column that received fills to its number of
        filled cells.

    Raises
    ------
    PolicyError
        If the target column contains any null.
    InsufficientDataError
        If a mean/mode column has no observed values and no fallback.
    """
    targets = [n for n in dataset.column_names if role_map.get(n) is Role.TARGET]
    if target_column is not None and target_column not in targets:
        targets.append(target_column)
    for name in targets:
        check_target(dataset, name)

    # Resolve every fill value before touching the frame; a failure in any
    # column leaves no partially imputed output behind.
    fills: Dict[str, Any] = {}
    for col in dataset.schema:
        strategy = policy.strategy_for(role_map.get(col.name, Role.DEMOGRAPHIC_FEATURE))
        if strategy is Strategy.LEAVE_NULL:
            continue
        series = dataset.frame[col.name]
        if not series.isna().any():
            continue
        fills[col.name] = resolve_fill_value(series, strategy, col.declared_type, policy.constant_value)
        logger.debug("Column %r: %s fill with %r", col.name, strategy.value, fills[col.name])

    out = dataset.frame.copy()
    filled: Dict[str, int] = {}
    for name, value in fills.items():
        nulls = out[name].isna()
        filled[name] = int(nulls.sum())
        out[name] = _fill_column(out[name], nulls, value)

    if filled:
        logger.info(
            "Imputed %d cell(s) across %d column(s)", sum(filled.values()), len(filled)
        )
    return Dataset(schema=dataset.schema, frame=out), filled


def _fill_column(series: pd.Series, nulls: pd.Series, value: Any) -> pd.Series:
    # An all-null column arrives as object dtype; give it the fill value's type.
    if nulls.all():
        return pd.Series([value] * len(series), index=series.index, name=series.name)
    if not _dtype_holds(series, value):
        series = series.astype(object)
    elif pd.api.types.is_integer_dtype(series) and isinstance(value, (float, np.floating)):
        # Nullable integer columns cannot hold a fractional mean.
        series = series.astype("float64")
    filled = series.copy()
    filled[nulls] = value
    return filled


def _dtype_holds(series: pd.Series, value: Any) -> bool:
    """Whether ``value`` can be written into ``series`` without changing its dtype family."""
    if pd.api.types.is_object_dtype(series):
        return True
    if pd.api.types.is_numeric_dtype(series):
        return isinstance(value, (int, float, np.number))
    # Dedicated string dtypes (the default for text in pandas 3) reject non-strings.
    if pd.api.types.is_string_dtype(series):
        return isinstance(value, str)
    return False


__all__ = [
    "ImputationPolicy",
    "Strategy",
    "check_target",
    "impute",
    "resolve_fill_value",
]
