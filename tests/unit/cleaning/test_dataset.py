"""Unit tests for the dataset value types."""

from __future__ import annotations

import pandas as pd
import pytest

from behaviour_cleaning.src.cleaning import (
    Column,
    ColumnType,
    DataValidationError,
    Dataset,
    Role,
    Schema,
)


def test_schema_infers_declared_types() -> None:
    frame = pd.DataFrame(
        {"bets": [1.5, None], "flag": [True, False], "country": ["AT", None]}
    )

    schema = Dataset.from_frame(frame).schema

    assert [c.declared_type for c in schema] == [
        ColumnType.NUMERIC,
        ColumnType.BOOLEAN,
        ColumnType.STRING,
    ]


def test_schema_rejects_duplicate_names() -> None:
    with pytest.raises(DataValidationError):
        Schema((Column("a", ColumnType.NUMERIC), Column("a", ColumnType.STRING)))


def test_from_frame_copies_input() -> None:
    frame = pd.DataFrame({"a": [1, 2]})

    dataset = Dataset.from_frame(frame)
    frame.loc[0, "a"] = 99

    assert dataset.frame["a"].tolist() == [1, 2]


def test_records_normalise_nulls_to_none() -> None:
    dataset = Dataset.from_records([{"a": 1.0, "b": "x"}, {"a": None, "b": None}])

    assert list(dataset.records())[1] == {"a": None, "b": None}


def test_with_roles_returns_new_dataset() -> None:
    dataset = Dataset.from_records([{"a": 1}])

    tagged = dataset.with_roles({"a": Role.IDENTIFIER})

    assert tagged.schema.column("a").role is Role.IDENTIFIER
    assert dataset.schema.column("a").role is None
    assert tagged != dataset


def test_schema_select_keeps_schema_order() -> None:
    schema = Dataset.from_records([{"a": 1, "b": 2, "c": 3}]).schema

    assert schema.select(["c", "a"]).names == ["a", "c"]


def test_dataset_does_not_share_the_given_frame() -> None:
    frame = pd.DataFrame({"a": [1, 2]})
    dataset = Dataset(schema=Schema.from_frame(frame), frame=frame)

    frame.loc[0, "a"] = 99

    assert dataset.frame["a"].tolist() == [1, 2]


def test_to_frame_edits_do_not_reach_dataset() -> None:
    dataset = Dataset.from_records([{"a": 1}, {"a": 2}])

    copy = dataset.to_frame()
    copy.loc[1, "a"] = 99

    assert dataset.frame["a"].tolist() == [1, 2]
