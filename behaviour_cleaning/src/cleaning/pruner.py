"""Drop columns whose role is excluded, keeping survivors in input order."""

from __future__ import annotations

import logging
from typing import AbstractSet, List, Mapping, Optional, Tuple

from .dataset import Dataset, Role
from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_ROLES = frozenset({Role.REDUNDANT_DERIVED, Role.DUPLICATE_TRANSFORMED})


def pruned_columns(
    dataset: Dataset,
    role_map: Mapping[str, Role],
    exclude_roles: AbstractSet[Role] = DEFAULT_EXCLUDE_ROLES,
) -> Tuple[List[str], List[str]]:
    """Split the schema into ``(kept, dropped)`` column names."""
    if Role.TARGET in exclude_roles:
        raise ConfigError("exclude_roles must not contain Target; the label is never dropped.")

    missing = [name for name in dataset.column_names if name not in role_map]
    if missing:
        raise ConfigError(f"Columns without a role: {missing}", column=missing[0])

    kept: List[str] = []
    dropped: List[str] = []
    for name in dataset.column_names:
        (dropped if role_map[name] in exclude_roles else kept).append(name)
    return kept, dropped


def prune(
    dataset: Dataset,
    role_map: Mapping[str, Role],
    exclude_roles: Optional[AbstractSet[Role]] = None,
) -> Dataset:
    """Return a new dataset without the columns whose role is excluded."""
    if exclude_roles is None:
        exclude_roles = DEFAULT_EXCLUDE_ROLES

    kept, dropped = pruned_columns(dataset, role_map, exclude_roles)
    if dropped:
        logger.info("Pruning %d column(s): %s", len(dropped), dropped)

    return Dataset(schema=dataset.schema.select(kept), frame=dataset.frame.loc[:, kept].copy())


__all__ = ["prune", "pruned_columns", "DEFAULT_EXCLUDE_ROLES"]
