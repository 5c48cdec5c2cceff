"""Unit tests for the column pruner."""

from __future__ import annotations

import pytest

from behaviour_cleaning.src.cleaning import (
    CleaningConfig,
    ConfigError,
    Dataset,
    Role,
    classify,
    prune,
)


def test_prune_drops_default_roles_and_keeps_order(
    example_dataset: Dataset, example_config: CleaningConfig
) -> None:
    role_map = classify(example_dataset.schema, example_config)

    pruned = prune(example_dataset, role_map)

    assert pruned.column_names == [
        "id",
        "bets_sqrt_zeros",
        "Missing_Daily_Transactions",
        "age",
        "RG_case",
    ]
    assert pruned.n_rows == 3


def test_prune_survivors_never_redundant_or_duplicate(
    example_dataset: Dataset, example_config: CleaningConfig
) -> None:
    role_map = classify(example_dataset.schema, example_config)

    pruned = prune(example_dataset, role_map)

    for name in pruned.column_names:
        assert "nonzero" not in name.lower()
        assert not (name.endswith("_sqrt") and "_zeros" not in name)


def test_prune_leaves_input_untouched(example_dataset: Dataset, example_config: CleaningConfig) -> None:
    role_map = classify(example_dataset.schema, example_config)
    before = example_dataset.to_frame()

    prune(example_dataset, role_map)

    assert example_dataset.frame.equals(before)
    assert len(example_dataset.schema) == 7


def test_prune_with_custom_exclusions(example_dataset: Dataset, example_config: CleaningConfig) -> None:
    role_map = classify(example_dataset.schema, example_config)

    pruned = prune(example_dataset, role_map, exclude_roles={Role.REDUNDANT_DERIVED})

    assert "bets_sqrt" in pruned.column_names
    assert "bets_nonzero" not in pruned.column_names


def test_prune_refuses_to_drop_target(example_dataset: Dataset, example_config: CleaningConfig) -> None:
    role_map = classify(example_dataset.schema, example_config)

    with pytest.raises(ConfigError):
        prune(example_dataset, role_map, exclude_roles={Role.TARGET, Role.REDUNDANT_DERIVED})
