"""Append-only audit log of the actions taken during one pipeline run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Tuple

import pandas as pd


@dataclass(frozen=True)
class ManifestEntry:
    stage: str
    description: str
    columns_affected: FrozenSet[str] = frozenset()
    rows_affected: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns_affected", frozenset(self.columns_affected))
        if self.rows_affected < 0:
            raise ValueError("rows_affected must be non-negative.")

    @property
    def has_effect(self) -> bool:
        return bool(self.columns_affected) or self.rows_affected > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage,
            "description": self.description,
            "columns_affected": sorted(self.columns_affected),
            "rows_affected": int(self.rows_affected),
        }


@dataclass(frozen=True)
class Manifest:
    """Ordered, immutable sequence of :class:`ManifestEntry`.

    :meth:`append` returns a new manifest; existing entries are never changed.
    """

    entries: Tuple[ManifestEntry, ...] = ()

    def append(self, entry: ManifestEntry) -> "Manifest":
        return Manifest(self.entries + (entry,))

    def extend(self, entries: Iterable[ManifestEntry]) -> "Manifest":
        return Manifest(self.entries + tuple(entries))

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> ManifestEntry:
        return self.entries[index]

    def for_stage(self, stage: str) -> List[ManifestEntry]:
        return [e for e in self.entries if e.stage == stage]

    def is_empty_effect(self) -> bool:
        """True when no entry removed, tagged or filled anything."""
        return not any(e.has_effect for e in self.entries)

    def to_records(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.entries]

    def to_frame(self) -> pd.DataFrame:
        """Tabular view for reports; ``columns_affected`` is joined with commas."""
        rows = []
        for e in self.entries:
            row = e.to_dict()
            row["n_columns_affected"] = len(e.columns_affected)
            row["columns_affected"] = ",".join(row["columns_affected"])
            rows.append(row)
        return pd.DataFrame(
            rows,
            columns=["stage", "description", "columns_affected", "n_columns_affected", "rows_affected"],
        )


__all__ = ["Manifest", "ManifestEntry"]
