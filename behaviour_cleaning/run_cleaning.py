"""Clean a raw behavioural dataset and write the result plus its audit manifest.

Steps
-----
1) Load the raw CSV (delimiter auto-detection).
2) Run the cleaning pipeline: classify -> prune -> filter missing -> impute.
3) Write ``<output-dir>/tables/clean_dataset.csv`` and
   ``<output-dir>/tables/cleaning_manifest.json``.

Usage
-----
From the repository root:

    python behaviour_cleaning/run_cleaning.py --config behaviour_cleaning/configs/cleaning.yaml

A failing stage logs the structured error (stage, column, rows) and exits with
status 1 without writing any output.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
REPO_ROOT = PROJECT_ROOT.parent

# Ensure repo root is importable (needed when running from inside behaviour_cleaning/)
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import argparse
import json
from typing import Optional, Sequence

from behaviour_cleaning.src.cleaning import CleaningError, load_cleaning_config, run
from behaviour_cleaning.src.data.check_data import dataset_status
from behaviour_cleaning.src.data.load import DEFAULT_FILENAME, load_raw_dataset
from behaviour_cleaning.src.utils import configure_logging

OUTPUT_DIR = PROJECT_ROOT / "outputs"
TABLE_DIR_NAME = "tables"
LOG_DIR_NAME = "logs"

DEFAULT_DATA_DIR = PROJECT_ROOT / "data" / "raw"
DEFAULT_CONFIG = PROJECT_ROOT / "configs" / "cleaning.yaml"

CLEAN_FILENAME = "clean_dataset.csv"
MANIFEST_FILENAME = "cleaning_manifest.json"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the behavioural dataset cleaning pipeline.")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Directory containing the raw CSV (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--filename",
        type=str,
        default=DEFAULT_FILENAME,
        help=f"Raw CSV filename (default: {DEFAULT_FILENAME})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"Cleaning config YAML (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT_DIR,
        help=f"Directory for tables and logs (default: {OUTPUT_DIR})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console/file log level (default: INFO).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    table_dir = args.output_dir / TABLE_DIR_NAME
    log_dir = args.output_dir / LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = configure_logging(level=args.log_level, log_file=log_dir / "run_cleaning.log")

    exists, csv_path = dataset_status(args.data_dir, args.filename)
    if not exists:
        logger.error("Dataset not found at %s", csv_path)
        logger.error(
            "Run `python -m behaviour_cleaning.src.data.check_data` to verify dataset placement."
        )
        return 1

    try:
        config = load_cleaning_config(args.config, logger)
        raw = load_raw_dataset(data_dir=args.data_dir, filename=args.filename)
        logger.info("Loaded %s: %d rows x %d columns", csv_path, raw.n_rows, len(raw.schema))
        clean, manifest = run(raw, config)
    except CleaningError as exc:
        logger.error("Cleaning failed at stage '%s': %s", exc.stage, exc.message)
        if exc.column is not None:
            logger.error("Offending column: %s", exc.column)
        if exc.rows:
            logger.error("Offending rows (first 10): %s", list(exc.rows[:10]))
        return 1

    table_dir.mkdir(parents=True, exist_ok=True)
    clean_path = table_dir / CLEAN_FILENAME
    manifest_path = table_dir / MANIFEST_FILENAME

    clean.to_frame().to_csv(clean_path, index=False)
    payload = {
        "source": os.fspath(csv_path),
        "config": config.to_dict(),
        "roles": {col.name: col.role.value for col in clean.schema if col.role is not None},
        "manifest": manifest.to_records(),
    }
    manifest_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")

    for entry in manifest:
        logger.info(
            "[%s] %s (columns=%d, rows=%d)",
            entry.stage,
            entry.description,
            len(entry.columns_affected),
            entry.rows_affected,
        )
    logger.info("Saved clean dataset to %s", clean_path)
    logger.info("Saved manifest to %s", manifest_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
