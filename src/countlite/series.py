"""Validation of daily count series.

A count series is an ordered, zero-filled sequence of non-negative
integer event counts, one per calendar day. Changepoint semantics
depend on index order only, so inputs are never resorted here.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from .exceptions import InvalidInputError

__all__ = [
    "as_count_array",
    "as_count_series",
    "series_dates",
]


def as_count_array(
    sample: Sequence[int] | np.ndarray | pd.Series,
    min_length: int = 1,
) -> np.ndarray:
    """Coerce *sample* to a 1-D ``int64`` array of non-negative counts.

    Args:
        sample: Counts as a list, array or Series.
        min_length: Minimum number of observations required.

    Returns:
        A new ``int64`` array in the original order.

    Raises:
        InvalidInputError: If the sample is not 1-D, is shorter than
            *min_length*, or contains negative, fractional or
            non-finite values.
    """
    arr = np.asarray(sample)
    if arr.ndim != 1:
        raise InvalidInputError(f"Counts must be one-dimensional, got shape {arr.shape}")
    if len(arr) < min_length:
        raise InvalidInputError(
            f"Need at least {min_length} observation(s), got {len(arr)}"
        )
    if arr.dtype == bool or not np.issubdtype(arr.dtype, np.number):
        raise InvalidInputError(f"Counts must be numeric, got dtype {arr.dtype}")
    if np.issubdtype(arr.dtype, np.floating):
        if not np.all(np.isfinite(arr)):
            raise InvalidInputError("Counts must be finite")
        if np.any(arr != np.floor(arr)):
            raise InvalidInputError("Counts must be whole numbers")
    if np.any(arr < 0):
        raise InvalidInputError("Counts must be non-negative")
    return arr.astype(np.int64)


def as_count_series(
    series: Sequence[int] | np.ndarray | pd.Series,
) -> np.ndarray:
    """Validate a daily count series for changepoint analysis.

    Same as :func:`as_count_array` with a minimum length of 2, the
    shortest series that admits a split into two non-empty segments.
    """
    return as_count_array(series, min_length=2)


def series_dates(series: object) -> pd.DatetimeIndex | None:
    """Return the ``DatetimeIndex`` of *series*, if it carries one."""
    if isinstance(series, pd.Series) and isinstance(series.index, pd.DatetimeIndex):
        return series.index
    return None
