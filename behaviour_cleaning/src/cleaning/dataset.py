"""Immutable dataset values passed between pipeline stages.

A :class:`Dataset` pairs an ordered :class:`Schema` with a pandas frame holding
the records. Stages never mutate a dataset; they build a new one from a copy of
the frame, so the caller's table is left untouched even when a later stage
fails.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Hashable, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import DataValidationError


class Role(str, Enum):
    """Semantic role of a column."""

    IDENTIFIER = "Identifier"
    TARGET = "Target"
    MISSING_INDICATOR = "MissingIndicator"
    REDUNDANT_DERIVED = "RedundantDerived"
    DUPLICATE_TRANSFORMED = "DuplicateTransformed"
    BEHAVIORAL_FEATURE = "BehavioralFeature"
    DEMOGRAPHIC_FEATURE = "DemographicFeature"


class ColumnType(str, Enum):
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    STRING = "string"


def infer_column_type(series: pd.Series) -> ColumnType:
    """Map a pandas dtype onto the declared column type."""
    if pd.api.types.is_bool_dtype(series):
        return ColumnType.BOOLEAN
    if pd.api.types.is_numeric_dtype(series):
        return ColumnType.NUMERIC
    # Object columns holding only bools (plus nulls) are still boolean.
    non_null = series.dropna()
    if len(non_null) > 0 and all(isinstance(v, (bool, np.bool_)) for v in non_null):
        return ColumnType.BOOLEAN
    return ColumnType.STRING


@dataclass(frozen=True)
class Column:
    name: str
    declared_type: ColumnType
    role: Optional[Role] = None


@dataclass(frozen=True)
class Schema:
    """Ordered sequence of uniquely named columns."""

    columns: Tuple[Column, ...]

    def __post_init__(self) -> None:
        names = [c.name for c in self.columns]
        seen: set[str] = set()
        duplicates = [n for n in names if n in seen or seen.add(n)]
        if duplicates:
            raise DataValidationError(
                f"Schema column names must be unique; duplicated: {sorted(set(duplicates))}"
            )

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "Schema":
        if frame.columns.duplicated().any():
            dupes = sorted({str(c) for c in frame.columns[frame.columns.duplicated()]})
            raise DataValidationError(f"Schema column names must be unique; duplicated: {dupes}")
        return cls(
            tuple(Column(str(name), infer_column_type(frame[name])) for name in frame.columns)
        )

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.columns]

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __contains__(self, name: object) -> bool:
        return any(c.name == name for c in self.columns)

    def column(self, name: str) -> Column:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(f"Column '{name}' not found in schema.")

    def select(self, names: Sequence[str]) -> "Schema":
        """Return the sub-schema of ``names`` in this schema's order."""
        wanted = set(names)
        return Schema(tuple(c for c in self.columns if c.name in wanted))

    def with_roles(self, role_map: Mapping[str, Role]) -> "Schema":
        return Schema(
            tuple(replace(c, role=role_map.get(c.name, c.role)) for c in self.columns)
        )


@dataclass(frozen=True, eq=False)
class Dataset:
    """Schema plus ordered records.

    The dataset owns a private copy of the frame it is built from, so later
    changes to the caller's frame never leak in. pandas has no read-only
    DataFrame, so ``frame`` itself is not locked: stages read it and build
    their output from :meth:`to_frame` or ``frame.copy()``, never by writing
    to it in place.
    """

    schema: Schema
    frame: pd.DataFrame

    def __post_init__(self) -> None:
        if list(self.frame.columns) != self.schema.names:
            raise DataValidationError(
                "Frame columns do not match schema order: "
                f"{list(self.frame.columns)} != {self.schema.names}"
            )
        object.__setattr__(self, "frame", self.frame.copy())

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, schema: Optional[Schema] = None) -> "Dataset":
        """Build a dataset from a copy of ``frame``; infer the schema if omitted."""
        out = frame.rename(columns=str)
        return cls(schema=schema if schema is not None else Schema.from_frame(out), frame=out)

    @classmethod
    def from_records(
        cls,
        records: Sequence[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
    ) -> "Dataset":
        """Build a dataset from row mappings.

        ``columns`` fixes the schema order; by default the key order of the
        first record is used. ``None`` values become nulls.
        """
        if columns is None:
            columns = list(records[0].keys()) if records else []
        frame = pd.DataFrame([{c: r.get(c) for c in columns} for r in records], columns=list(columns))
        return cls.from_frame(frame)

    @property
    def n_rows(self) -> int:
        return int(self.frame.shape[0])

    @property
    def column_names(self) -> List[str]:
        return self.schema.names

    def to_frame(self) -> pd.DataFrame:
        return self.frame.copy()

    def records(self) -> Iterator[Dict[str, Any]]:
        """Yield each record as a dict, with nulls normalised to ``None``."""
        for row in self.frame.itertuples(index=False, name=None):
            yield {
                name: (None if _is_null(value) else value)
                for name, value in zip(self.schema.names, row)
            }

    def row_labels(self) -> List[Hashable]:
        return list(self.frame.index)

    def with_roles(self, role_map: Mapping[str, Role]) -> "Dataset":
        return Dataset(schema=self.schema.with_roles(role_map), frame=self.frame)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return self.schema == other.schema and self.frame.equals(other.frame)

    def __repr__(self) -> str:
        return f"Dataset(n_rows={self.n_rows}, columns={self.schema.names})"


def _is_null(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


__all__ = ["Role", "ColumnType", "Column", "Schema", "Dataset", "infer_column_type"]
