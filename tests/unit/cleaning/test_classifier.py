"""Unit tests for column classification."""

from __future__ import annotations

import pytest

from behaviour_cleaning.src.cleaning import (
    CleaningConfig,
    ConfigError,
    Dataset,
    Role,
    classify,
    columns_with_role,
    summarize_roles,
)


def _schema(*names: str):
    return Dataset.from_records([{n: 0 for n in names}], columns=list(names)).schema


def test_classify_example_schema(example_dataset: Dataset, example_config: CleaningConfig) -> None:
    """Each naming rule should yield its role on the worked example."""
    role_map = classify(example_dataset.schema, example_config)

    assert role_map == {
        "id": Role.DEMOGRAPHIC_FEATURE,
        "bets_nonzero": Role.REDUNDANT_DERIVED,
        "bets_sqrt": Role.DUPLICATE_TRANSFORMED,
        "bets_sqrt_zeros": Role.BEHAVIORAL_FEATURE,
        "Missing_Daily_Transactions": Role.MISSING_INDICATOR,
        "age": Role.DEMOGRAPHIC_FEATURE,
        "RG_case": Role.TARGET,
    }


def test_nonzero_wins_over_sqrt_and_lexicon(example_config: CleaningConfig) -> None:
    """Redundant rule comes first, case-insensitively."""
    schema = _schema("casino_NonZero_sqrt", "Missing_Daily_Transactions", "RG_case")

    role_map = classify(schema, example_config)

    assert role_map["casino_NonZero_sqrt"] is Role.REDUNDANT_DERIVED


def test_sqrt_rule_precedes_lexicon(example_config: CleaningConfig) -> None:
    schema = _schema(
        "casino_bets_sqrt",
        "casino_bets_sqrt_zeros",
        "fixedodds_stakes",
        "Missing_Daily_Transactions",
        "RG_case",
    )

    role_map = classify(schema, example_config)

    assert role_map["casino_bets_sqrt"] is Role.DUPLICATE_TRANSFORMED
    assert role_map["casino_bets_sqrt_zeros"] is Role.BEHAVIORAL_FEATURE
    assert role_map["fixedodds_stakes"] is Role.BEHAVIORAL_FEATURE


def test_lexicon_match_is_case_insensitive(example_config: CleaningConfig) -> None:
    schema = _schema("LiveAction_Days", "Country", "Missing_Daily_Transactions", "RG_case")

    role_map = classify(schema, example_config)

    assert role_map["LiveAction_Days"] is Role.BEHAVIORAL_FEATURE
    assert role_map["Country"] is Role.DEMOGRAPHIC_FEATURE


def test_identifier_columns_are_classified(example_config: CleaningConfig) -> None:
    config = example_config.updated(identifier_columns=("UserID",))
    schema = _schema("UserID", "Missing_Daily_Transactions", "RG_case")

    assert classify(schema, config)["UserID"] is Role.IDENTIFIER


def test_every_column_gets_exactly_one_role(example_config: CleaningConfig) -> None:
    names = ["a", "b_nonzero", "c_sqrt", "d_sqrt_zeros", "casino_x", "Missing_Daily_Transactions", "RG_case"]

    role_map = classify(_schema(*names), example_config)

    assert list(role_map) == names
    assert sum(summarize_roles(role_map).values()) == len(names)


@pytest.mark.parametrize(
    "changes",
    [
        {"missing_indicator_column": None},
        {"target_column": ""},
        {"behavioral_lexicon": frozenset()},
    ],
)
def test_classify_requires_names_and_lexicon(example_config: CleaningConfig, changes: dict) -> None:
    config = example_config.updated(**changes)

    with pytest.raises(ConfigError):
        classify(_schema("a"), config)


def test_target_shadowed_by_naming_rule_is_rejected(example_config: CleaningConfig) -> None:
    """A target that would be pruned as redundant must fail loudly."""
    config = example_config.updated(target_column="label_nonzero")
    schema = _schema("label_nonzero", "Missing_Daily_Transactions")

    with pytest.raises(ConfigError) as excinfo:
        classify(schema, config)

    assert excinfo.value.column == "label_nonzero"


def test_columns_with_role_follows_given_order(example_config: CleaningConfig) -> None:
    names = ["z_sqrt", "casino_days", "a_sqrt", "Missing_Daily_Transactions", "RG_case"]
    role_map = classify(_schema(*names), example_config)

    assert columns_with_role(role_map, Role.DUPLICATE_TRANSFORMED, names) == ["z_sqrt", "a_sqrt"]
    assert columns_with_role(role_map, Role.IDENTIFIER) == []


def test_identifier_shadowed_by_naming_rule_is_rejected(example_config: CleaningConfig) -> None:
    """An identifier that would be pruned as a duplicate must fail loudly."""
    config = example_config.updated(identifier_columns=("user_sqrt",))
    schema = _schema("user_sqrt", "Missing_Daily_Transactions", "RG_case")

    with pytest.raises(ConfigError) as excinfo:
        classify(schema, config)

    assert excinfo.value.column == "user_sqrt"
    assert "DuplicateTransformed" in str(excinfo.value)
