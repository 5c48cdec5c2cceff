"""Raw data loading (an external collaborator of the cleaning core).

The loader reads the delimited export into a pandas frame and wraps it into a
:class:`~behaviour_cleaning.src.cleaning.dataset.Dataset`; all cleaning rules
live in :mod:`behaviour_cleaning.src.cleaning`.
"""

from __future__ import annotations

from .load import DEFAULT_DATA_DIR, DEFAULT_FILENAME, load_raw_data, load_raw_dataset

__all__ = [
    "load_raw_data",
    "load_raw_dataset",
    "DEFAULT_DATA_DIR",
    "DEFAULT_FILENAME",
]
