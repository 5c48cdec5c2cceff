"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from behaviour_cleaning.src.cleaning import CleaningConfig, Dataset  # noqa: E402

EXAMPLE_COLUMNS = [
    "id",
    "bets_nonzero",
    "bets_sqrt",
    "bets_sqrt_zeros",
    "Missing_Daily_Transactions",
    "age",
    "RG_case",
]


@pytest.fixture
def example_dataset() -> Dataset:
    """Three-account dataset with one absent behavioural block."""
    rows = [
        {"id": 1, "bets_nonzero": 5, "bets_sqrt": 2.1, "bets_sqrt_zeros": 2.1,
         "Missing_Daily_Transactions": 0, "age": 34, "RG_case": 0},
        {"id": 2, "bets_nonzero": None, "bets_sqrt": None, "bets_sqrt_zeros": None,
         "Missing_Daily_Transactions": 1, "age": None, "RG_case": 1},
        {"id": 3, "bets_nonzero": 0, "bets_sqrt": None, "bets_sqrt_zeros": 0,
         "Missing_Daily_Transactions": 0, "age": None, "RG_case": 0},
    ]
    return Dataset.from_records(rows, columns=EXAMPLE_COLUMNS)


@pytest.fixture
def example_config() -> CleaningConfig:
    return CleaningConfig(
        missing_indicator_column="Missing_Daily_Transactions",
        target_column="RG_case",
        drop_redundant=True,
        drop_duplicate_transformed=True,
        missing_record_mode="drop",
        demographic_impute_strategy="mean",
    )
