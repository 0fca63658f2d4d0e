from __future__ import annotations

from pathlib import Path

import pandas as pd
from loguru import logger

_TAB_SUFFIXES = {".tsv", ".txt"}


def load_label_table(file_path: Path | str, index_column: str | None = None) -> pd.DataFrame:
    """
    Load a per-cell label table from CSV, TSV or Parquet.

    Args:
        file_path: Path to the table. The format is chosen by suffix.
        index_column: Column to use as the cell index, if any.

    Returns:
        The loaded DataFrame.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    logger.info(f"Loading data from {file_path}...")
    if file_path.suffix == ".parquet":
        df = pd.read_parquet(file_path)
    elif file_path.suffix in _TAB_SUFFIXES:
        df = pd.read_csv(file_path, sep="\t")
    else:
        df = pd.read_csv(file_path)

    if index_column:
        if index_column not in df.columns:
            raise KeyError(f"Index column '{index_column}' not found in {file_path}")
        df = df.set_index(index_column)
    return df


def save_label_table(df: pd.DataFrame, file_path: Path | str, index: bool = True) -> None:
    """Save a table to CSV, TSV or Parquet, chosen by suffix."""
    file_path = Path(file_path)
    logger.info(f"Saving {len(df)} rows to {file_path}...")
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if file_path.suffix == ".parquet":
        df.to_parquet(file_path, index=index)
    elif file_path.suffix in _TAB_SUFFIXES:
        df.to_csv(file_path, sep="\t", index=index)
    else:
        df.to_csv(file_path, index=index)
    logger.info("Save complete.")
