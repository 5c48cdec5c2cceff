"""Unit tests for raw CSV loading and the dataset check CLI."""

from __future__ import annotations

from pathlib import Path

import pytest

from behaviour_cleaning.src.data.check_data import dataset_status
from behaviour_cleaning.src.data.check_data import main as check_data_main
from behaviour_cleaning.src.data.load import load_raw_data, load_raw_dataset

CSV_ROWS = [
    "UserID;casino_bets_sqrt_zeros;Missing_Daily_Transactions;age;RG_case",
    "1;2.1;0;34;0",
    "2;;1;NULL;1",
]


def _write_csv(tmp_path: Path, sep: str = ";") -> Path:
    path = tmp_path / "behaviour_data.csv"
    path.write_text("\n".join(r.replace(";", sep) for r in CSV_ROWS) + "\n", encoding="utf-8")
    return path


@pytest.mark.parametrize("sep", [",", ";", "\t"])
def test_load_raw_data_detects_delimiter(tmp_path: Path, sep: str) -> None:
    _write_csv(tmp_path, sep)

    df = load_raw_data(data_dir=tmp_path)

    assert list(df.columns)[0] == "UserID"
    assert df.shape == (2, 5)
    assert df["age"].isna().tolist() == [False, True]


def test_load_raw_dataset_wraps_frame(tmp_path: Path) -> None:
    _write_csv(tmp_path)

    dataset = load_raw_dataset(data_dir=tmp_path)

    assert dataset.column_names[-1] == "RG_case"
    assert dataset.n_rows == 2


def test_load_raw_data_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_raw_data(data_dir=tmp_path)


def test_dataset_status(tmp_path: Path) -> None:
    assert dataset_status(tmp_path)[0] is False
    _write_csv(tmp_path)
    assert dataset_status(tmp_path)[0] is True


def test_check_data_prints_roles(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_csv(tmp_path)
    config = tmp_path / "cleaning.yaml"
    config.write_text(
        "cleaning:\n"
        "  missing_indicator_column: Missing_Daily_Transactions\n"
        "  target_column: RG_case\n"
        "  identifier_columns: [UserID]\n",
        encoding="utf-8",
    )

    status = check_data_main(["--data-dir", str(tmp_path), "--config", str(config)])

    out = capsys.readouterr().out
    assert status == 0
    assert "MissingIndicator" in out
    assert "Identifier" in out


def test_check_data_lists_pruned_columns(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "behaviour_data.csv").write_text(
        "bets_nonzero,bets_sqrt,casino_sqrt,Missing_Daily_Transactions,RG_case\n"
        "1,1.0,1.0,0,0\n",
        encoding="utf-8",
    )
    config = tmp_path / "cleaning.yaml"
    config.write_text(
        "cleaning:\n"
        "  missing_indicator_column: Missing_Daily_Transactions\n"
        "  target_column: RG_case\n",
        encoding="utf-8",
    )

    status = check_data_main(["--data-dir", str(tmp_path), "--config", str(config)])

    out = capsys.readouterr().out
    assert status == 0
    assert "Pruned as DuplicateTransformed: bets_sqrt, casino_sqrt" in out
    assert "Pruned as RedundantDerived: bets_nonzero" in out
