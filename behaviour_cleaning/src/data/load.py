"""Loading helpers for the raw behavioural CSV.

Exports of the account-level gambling data are not consistently
comma-separated (tab and semicolon variants exist). The loader:

1) tries standard :func:`pandas.read_csv` parsing;
2) falls back to delimiter auto-detection if the result looks collapsed.

Loading is kept outside the cleaning core; :func:`load_raw_dataset` only wraps
the frame into an immutable :class:`Dataset` for the pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import pandas as pd
from pandas.errors import ParserError

from ..cleaning.dataset import Dataset


DEFAULT_DATA_DIR = Path("behaviour_cleaning/data/raw")
DEFAULT_FILENAME = "behaviour_data.csv"

# Null markers seen in exports besides the pandas defaults.
EXTRA_NA_VALUES: Sequence[str] = ("NULL", "null", ".")


def load_raw_data(
    data_dir: Path = DEFAULT_DATA_DIR,
    filename: str = DEFAULT_FILENAME,
    min_expected_columns: int = 2,
    na_values: Optional[Sequence[str]] = EXTRA_NA_VALUES,
) -> pd.DataFrame:
    """Load the raw CSV with robust delimiter handling.

    Parameters
    ----------
    data_dir:
        Directory containing the CSV.
    filename:
        CSV filename.
    min_expected_columns:
        Sanity threshold: fewer parsed columns means delimiter parsing failed
        and auto-detection is attempted.
    na_values:
        Additional strings to read as null.
    """
    csv_path = Path(data_dir) / filename
    if not csv_path.is_file():
        raise FileNotFoundError(
            f"Expected dataset at {csv_path}. Please place the raw CSV in this location."
        )

    na = list(na_values) if na_values is not None else None

    try:
        df = pd.read_csv(csv_path, na_values=na)
    except (ParserError, ValueError):
        df = None

    if df is None or df.shape[1] < min_expected_columns:
        try:
            df = pd.read_csv(
                csv_path,
                na_values=na,
                sep=None,  # infer '\t', ';', etc.
                engine="python",
            )
        except ParserError as exc:
            raise ValueError(
                f"Failed to parse dataset at {csv_path} with automatic delimiter detection."
            ) from exc

    if df.shape[1] < min_expected_columns:
        raise ValueError(
            f"Parsed dataset from {csv_path} appears to have only {df.shape[1]} columns; "
            "please verify the file and its delimiter."
        )

    return df


def load_raw_dataset(
    data_dir: Path = DEFAULT_DATA_DIR,
    filename: str = DEFAULT_FILENAME,
    **kwargs,
) -> Dataset:
    """Load the raw CSV as a :class:`Dataset` with an inferred schema."""
    return Dataset.from_frame(load_raw_data(data_dir=data_dir, filename=filename, **kwargs))
