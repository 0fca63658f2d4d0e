"""Map the "no confident label" outputs of annotation tools onto the sentinel."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from .vote import AMBIGUOUS

# Spellings of "no label" used by common annotation tools
DEFAULT_MISSING_VALUES: tuple[str, ...] = (
    "",
    "na",
    "nan",
    "none",
    "null",
    "unassigned",
    "unknown",
)


def _missing_set(missing_values: Iterable[str] | None, sentinel: str) -> set[str]:
    values = DEFAULT_MISSING_VALUES if missing_values is None else missing_values
    return {str(v).strip().casefold() for v in values} | {sentinel.casefold()}


def normalize_label(
    value: Any,
    sentinel: str = AMBIGUOUS,
    missing_values: Iterable[str] | None = None,
) -> str:
    """
    Normalize one label value.

    Missing values (``None``, NaN, ``pd.NA``) and strings matching one of
    ``missing_values`` case-insensitively become the sentinel. Anything
    else is converted to a whitespace-stripped string.
    """
    return _normalize(value, sentinel, _missing_set(missing_values, sentinel))


def _normalize(value: Any, sentinel: str, missing: set[str]) -> str:
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return sentinel
    text = str(value).strip()
    if text.casefold() in missing:
        return sentinel
    return text


def normalize_labels(
    values: Iterable[Any],
    sentinel: str = AMBIGUOUS,
    missing_values: Iterable[str] | None = None,
) -> list[str]:
    """Normalize a sequence of label values."""
    missing = _missing_set(missing_values, sentinel)
    return [_normalize(v, sentinel, missing) for v in values]


def normalize_frame(
    df: pd.DataFrame,
    columns: list[str],
    sentinel: str = AMBIGUOUS,
    missing_values: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Return a copy of the label columns of ``df`` with every value normalized."""
    missing = _missing_set(missing_values, sentinel)
    return pd.DataFrame(
        {
            col: [_normalize(v, sentinel, missing) for v in df[col].tolist()]
            for col in columns
        },
        index=df.index,
    )
