"""Detect (and drop or tag) records whose behavioural block was never recorded.

The indicator column must hold only 0 or 1. Anything else, including nulls,
booleans spelled as strings, or a stray 2, is rejected rather than coerced.
This stage runs before imputation so that absent accounts do not bias the
statistics used to fill demographic gaps.
"""

from __future__ import annotations

import logging
from numbers import Number
from typing import Any, Hashable, List, Tuple, Union

import numpy as np
import pandas as pd

from .config import FilterMode
from .dataset import Dataset
from .errors import ConfigError, DataValidationError

logger = logging.getLogger(__name__)


def _is_valid_flag(value: Any) -> bool:
    if isinstance(value, (str, bytes)) or value is None:
        return False
    if not isinstance(value, (Number, np.number, np.bool_)):
        return False
    if pd.isna(value):
        return False
    return value == 0 or value == 1


def indicator_mask(dataset: Dataset, indicator_column: str) -> pd.Series:
    """Boolean mask of rows flagged as missing (indicator == 1).

    Raises
    ------
    DataValidationError
        If any indicator value is outside ``{0, 1}``; the error lists every
        offending row label.
    """
    if indicator_column not in dataset.schema:
        raise ConfigError(
            f"Missing-record indicator '{indicator_column}' not found in dataset columns.",
            column=indicator_column,
        )

    values = dataset.frame[indicator_column]
    valid = values.map(_is_valid_flag).astype(bool)
    if not valid.all():
        bad_rows: List[Hashable] = list(values.index[~valid])
        bad_values = sorted({repr(v) for v in values[~valid]})
        raise DataValidationError(
            f"Indicator column '{indicator_column}' must contain only 0/1; "
            f"found {bad_values} in {len(bad_rows)} row(s), first at row {bad_rows[0]!r}",
            column=indicator_column,
            rows=bad_rows,
        )
    return values.map(lambda v: v == 1).astype(bool)


def filter_missing(
    dataset: Dataset,
    indicator_column: str,
    mode: Union[FilterMode, str] = FilterMode.DROP,
) -> Tuple[Dataset, int]:
    """Drop or tag indicator==1 records.

    Returns
    -------
    (dataset, count)
        ``count`` is the number of flagged rows: removed in ``drop`` mode,
        merely counted in ``tag`` mode (where the dataset comes back unchanged).
    """
    try:
        mode = FilterMode(mode)
    except ValueError as exc:
        raise ConfigError(f"Unknown missing_record_mode {mode!r}; expected 'drop' or 'tag'.") from exc

    flagged = indicator_mask(dataset, indicator_column)
    count = int(flagged.sum())

    if mode is FilterMode.TAG:
        logger.info("Tag mode: %d record(s) flagged by '%s' kept", count, indicator_column)
        return Dataset(schema=dataset.schema, frame=dataset.frame.copy()), count

    logger.info("Dropping %d record(s) flagged by '%s'", count, indicator_column)
    return Dataset(schema=dataset.schema, frame=dataset.frame.loc[~flagged].copy()), count


__all__ = ["filter_missing", "indicator_mask"]
