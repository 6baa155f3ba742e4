"""Synthetic daily count series with piecewise-constant Poisson rates."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from .exceptions import InvalidInputError

__all__ = ["simulate_counts"]


def simulate_counts(
    rates: Sequence[float],
    lengths: Sequence[int],
    seed: int | None = None,
    start: str | pd.Timestamp | None = None,
) -> np.ndarray | pd.Series:
    """Draw a Poisson count series whose rate changes between segments.

    Args:
        rates: Poisson rate of each segment.
        lengths: Number of days in each segment.
        seed: Seed for ``numpy.random.default_rng``.
        start: If given, return a ``pandas.Series`` with a daily
            ``DatetimeIndex`` starting on this date.

    Returns:
        ``int64`` counts, as an array or a date-indexed Series.
    """
    if len(rates) != len(lengths) or len(rates) == 0:
        raise InvalidInputError("rates and lengths must be non-empty and of equal length")
    if any(r < 0 for r in rates):
        raise InvalidInputError("rates must be non-negative")
    if any(n < 1 for n in lengths):
        raise InvalidInputError("every segment needs at least one day")

    rng = np.random.default_rng(seed)
    counts = np.concatenate(
        [rng.poisson(lam, size=n) for lam, n in zip(rates, lengths)]
    ).astype(np.int64)

    if start is None:
        return counts
    index = pd.date_range(start=start, periods=len(counts), freq="D")
    return pd.Series(counts, index=index, name="count")
