"""CLI utility to verify dataset placement and preview column roles.

Run from the project root:

.. code-block:: bash

    python -m behaviour_cleaning.src.data.check_data

The dataset is only read, never modified.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from ..cleaning.classifier import classify, columns_with_role, summarize_roles
from ..cleaning.config import DEFAULT_CONFIG_PATH, load_cleaning_config
from ..cleaning.errors import CleaningError
from .load import DEFAULT_DATA_DIR, DEFAULT_FILENAME, load_raw_dataset


def dataset_status(
    data_dir: Path = DEFAULT_DATA_DIR,
    filename: str = DEFAULT_FILENAME,
) -> Tuple[bool, Path]:
    """Return whether the raw CSV exists, and its expected path."""
    csv_path = Path(data_dir) / filename
    return csv_path.is_file(), csv_path


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check dataset placement and column roles.")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Directory containing the CSV (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--filename",
        type=str,
        default=DEFAULT_FILENAME,
        help=f"CSV filename (default: {DEFAULT_FILENAME})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Cleaning config YAML (default: {DEFAULT_CONFIG_PATH})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    args.data_dir.mkdir(parents=True, exist_ok=True)

    exists, csv_path = dataset_status(args.data_dir, args.filename)
    if not exists:
        print(f"Dataset is missing. Expected the raw behavioural CSV at:\n   {csv_path}")
        return 1

    print(f"Found dataset at: {csv_path}")

    dataset = load_raw_dataset(data_dir=args.data_dir, filename=args.filename)
    print(f"Rows: {dataset.n_rows} | Columns: {len(dataset.schema)}")

    try:
        config = load_cleaning_config(args.config)
        role_map = classify(dataset.schema, config)
    except CleaningError as exc:
        print(f"Cannot classify columns: {exc}")
        return 1

    for name, role in role_map.items():
        print(f"  {name:<40} {role.value}")
    print("Role counts:", summarize_roles(role_map))
    for role in sorted(config.exclude_roles(), key=lambda r: r.value):
        pruned = columns_with_role(role_map, role, dataset.column_names)
        if pruned:
            print(f"Pruned as {role.value}: {', '.join(pruned)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
