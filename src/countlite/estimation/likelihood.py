"""Poisson log-likelihood evaluation.

The log-likelihood of counts ``x_1 .. x_n`` under rate ``lam`` is::

    sum_i  x_i * log(lam) - lam - lgamma(x_i + 1)

``lgamma`` replaces the factorial so counts in the hundreds stay exact
in the log domain. The term ``x_i * log(lam)`` follows the convention
``0 * log(0) = 0`` (via :func:`scipy.special.xlogy`), which only matters
for a fitted rate of zero, i.e. an all-zero sample.

Per-sample sums are accumulated strictly left to right so repeated
evaluations are bit-for-bit reproducible.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy import special

from ..exceptions import InvalidInputError
from ..series import as_count_array
from .rate import mle

__all__ = [
    "log_factorials",
    "poisson_log_likelihood",
    "fitted_log_likelihood",
    "poisson_fisher_inverse",
]


def log_factorials(sample: Sequence[int] | np.ndarray) -> np.ndarray:
    """``lgamma(x + 1)`` for each count, as float64."""
    arr = as_count_array(sample, min_length=0)
    return special.gammaln(arr.astype(np.float64) + 1.0)


def _ordered_sum(terms: np.ndarray) -> float:
    # np.sum uses pairwise reduction; cumsum is sequential.
    if len(terms) == 0:
        return 0.0
    return float(np.cumsum(terms)[-1])


def poisson_log_likelihood(
    sample: Sequence[int] | np.ndarray,
    rate: float | None = None,
) -> float:
    """Log-likelihood of *sample* under a Poisson rate.

    Args:
        sample: Non-empty sequence of non-negative integer counts.
        rate: Poisson rate. Must be strictly positive when given.
            Defaults to the MLE of *sample*; a fitted rate of zero
            (all-zero sample) is accepted under ``0 * log(0) = 0``.

    Returns:
        The log-likelihood as a float.

    Raises:
        InvalidInputError: On an empty sample or a non-positive,
            non-finite explicit rate.
    """
    arr = as_count_array(sample, min_length=1)
    if rate is None:
        lam = mle(arr)
    else:
        lam = float(rate)
        if not math.isfinite(lam) or lam <= 0:
            raise InvalidInputError(f"Poisson rate must be positive and finite, got {rate}")

    x = arr.astype(np.float64)
    terms = special.xlogy(x, lam) - lam - special.gammaln(x + 1.0)
    return _ordered_sum(terms)


def fitted_log_likelihood(
    totals: np.ndarray,
    lengths: np.ndarray,
    log_factorial_sums: np.ndarray,
) -> np.ndarray:
    """Log-likelihood at the MLE from per-segment sufficient statistics.

    With ``S`` the segment total, ``n`` its length and ``L`` the sum of
    ``lgamma(x_i + 1)``, the fitted rate is ``S / n`` and the
    log-likelihood reduces to ``S * log(S / n) - S - L``. Vectorised
    over segments; every ``lengths`` entry must be positive.
    """
    totals = np.asarray(totals, dtype=np.float64)
    lengths = np.asarray(lengths, dtype=np.float64)
    if np.any(lengths <= 0):
        raise InvalidInputError("Every segment must contain at least one observation")
    lam = totals / lengths
    return special.xlogy(totals, lam) - totals - np.asarray(log_factorial_sums)


def poisson_fisher_inverse(n: int, rate: float) -> float:
    """Inverse Fisher information ``rate / n`` of a Poisson rate from ``n`` draws."""
    if n <= 0:
        raise InvalidInputError(f"n must be positive, got {n}")
    if rate < 0:
        raise InvalidInputError(f"rate must be non-negative, got {rate}")
    return rate / n
