"""Run the cleaning stages in their fixed order.

Classify -> Prune -> Filter missing records -> Impute

The run is all-or-nothing. Manifest entries are collected locally and only
returned together with the clean dataset; if any stage raises, the caller gets
the error (tagged with the stage name) and nothing else.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from .classifier import RoleMap, classify, summarize_roles
from .config import CleaningConfig, FilterMode
from .dataset import Dataset, Role
from .errors import CleaningError, ConfigError
from .imputation import ImputationPolicy, check_target, impute
from .manifest import Manifest, ManifestEntry
from .missing_filter import filter_missing
from .pruner import prune, pruned_columns

logger = logging.getLogger(__name__)

STAGE_VALIDATE = "validate"
STAGE_CLASSIFY = "classify"
STAGE_PRUNE = "prune"
STAGE_FILTER = "filter_missing"
STAGE_IMPUTE = "impute"


class _Stage:
    """Context manager that tags errors raised inside it with a stage name."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __enter__(self) -> "_Stage":
        logger.debug("Stage %s started", self.name)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if isinstance(exc, CleaningError):
            exc.with_stage(self.name)
            logger.error("Stage %s failed: %s", self.name, exc)
        return False


def _classify_stage(raw: Dataset, config: CleaningConfig) -> RoleMap:
    with _Stage(STAGE_CLASSIFY):
        role_map = classify(raw.schema, config)
        for name, role in (
            (config.missing_indicator_column, Role.MISSING_INDICATOR),
            (config.target_column, Role.TARGET),
        ):
            if name not in raw.schema:
                raise ConfigError(
                    f"Configured {role.value} column '{name}' is not in the dataset.",
                    column=name,
                )
        logger.info("Classified %d column(s): %s", len(role_map), summarize_roles(role_map))
    return role_map


def run(raw_dataset: Dataset, config: CleaningConfig) -> Tuple[Dataset, Manifest]:
    """Clean ``raw_dataset`` according to ``config``.

    Returns
    -------
    (clean_dataset, manifest)
        ``manifest`` holds one entry each for pruning, record filtering and
        imputation, in that order.

    Raises
    ------
    CleaningError
        Any stage failure; ``error.stage`` names the stage. ``raw_dataset`` is
        never modified.
    """
    logger.info(
        "Cleaning run started: %d row(s) x %d column(s)", raw_dataset.n_rows, len(raw_dataset.schema)
    )

    role_map = _classify_stage(raw_dataset, config)

    # A null label anywhere in the input fails the run, even on rows the
    # filter would remove.
    with _Stage(STAGE_VALIDATE):
        check_target(raw_dataset, config.target_column)

    entries = []

    with _Stage(STAGE_PRUNE):
        exclude = config.exclude_roles()
        _, dropped = pruned_columns(raw_dataset, role_map, exclude)
        pruned = prune(raw_dataset, role_map, exclude)
        entries.append(
            ManifestEntry(
                stage=STAGE_PRUNE,
                description=f"Removed {len(dropped)} column(s) with roles "
                f"{sorted(r.value for r in exclude)}",
                columns_affected=frozenset(dropped),
                rows_affected=0,
            )
        )

    with _Stage(STAGE_FILTER):
        mode = config.missing_record_mode
        filtered, flagged = filter_missing(pruned, config.missing_indicator_column, mode)
        verb = "Removed" if mode is FilterMode.DROP else "Tagged"
        entries.append(
            ManifestEntry(
                stage=STAGE_FILTER,
                description=f"{verb} {flagged} record(s) with "
                f"{config.missing_indicator_column} == 1 (mode={mode.value})",
                columns_affected=frozenset(),
                rows_affected=flagged,
            )
        )

    with _Stage(STAGE_IMPUTE):
        policy = ImputationPolicy.from_config(config)
        surviving_roles: Dict[str, Role] = {n: role_map[n] for n in filtered.column_names}
        imputed, filled = impute(filtered, surviving_roles, policy, target_column=config.target_column)
        entries.append(
            ManifestEntry(
                stage=STAGE_IMPUTE,
                description=f"Filled {sum(filled.values())} null cell(s) "
                f"(behavioural=zero, demographic={policy.demographic.value})",
                columns_affected=frozenset(filled),
                rows_affected=sum(filled.values()),
            )
        )

    clean = imputed.with_roles(surviving_roles)
    manifest = Manifest().extend(entries)
    logger.info(
        "Cleaning run finished: %d row(s) x %d column(s)", clean.n_rows, len(clean.schema)
    )
    return clean, manifest


__all__ = [
    "run",
    "STAGE_CLASSIFY",
    "STAGE_PRUNE",
    "STAGE_FILTER",
    "STAGE_IMPUTE",
    "STAGE_VALIDATE",
]
