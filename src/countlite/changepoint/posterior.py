"""Normalisation of a changepoint log-likelihood profile.

Under a uniform prior over split locations the posterior is
proportional to the exponentiated profile. Log-likelihoods of daily
count series are routinely in the thousands below zero, so the profile
is shifted by its maximum before exponentiating (log-sum-exp). The
shift cancels in the normalisation as long as it stays near the
maximum. A shift far above it underflows the smaller terms to zero
while the total stays finite, which silently changes the result.
"""

from __future__ import annotations

import logging

import numpy as np

from ..core.types import ChangepointPosterior, ChangepointProfile
from ..exceptions import InvalidInputError, NumericalInstabilityError

__all__ = [
    "normalize",
    "map_estimate",
    "expected_changepoint",
    "changepoint_credible_set",
]

logger = logging.getLogger(__name__)


def _first_argmax(taus: np.ndarray, probabilities: np.ndarray) -> int:
    # np.argmax returns the first maximum, i.e. the smallest tau on ties.
    return int(taus[int(np.argmax(probabilities))])


def normalize(
    profile: ChangepointProfile,
    shift: float | None = None,
) -> ChangepointPosterior:
    """Convert a log-likelihood profile into a posterior over splits.

    Args:
        profile: Output of :func:`countlite.changepoint.search.evaluate`.
        shift: Constant subtracted before exponentiating. Defaults to
            the profile maximum, which keeps the largest term at 1. Other
            values should stay within a few hundred of the maximum.

    Returns:
        A :class:`ChangepointPosterior` whose probabilities sum to 1.

    Raises:
        NumericalInstabilityError: If the profile contains NaN or
            ``+inf``, is entirely ``-inf``, or *shift* pushes the sum of
            exponentials to zero or infinity.
    """
    values = np.asarray(profile.log_likelihoods, dtype=np.float64)
    if len(values) == 0:
        raise InvalidInputError("Profile has no candidate splits")
    if np.any(np.isnan(values)) or np.any(values == np.inf):
        raise NumericalInstabilityError("Profile contains NaN or +inf log-likelihoods")
    if not np.any(np.isfinite(values)):
        raise NumericalInstabilityError("Every split has zero likelihood")

    if shift is None:
        shift = float(values.max())
    elif not np.isfinite(shift):
        raise InvalidInputError(f"shift must be finite, got {shift}")

    with np.errstate(over="ignore", under="ignore"):
        weights = np.exp(values - shift)
        total = weights.sum()
    if not np.isfinite(total) or total == 0:
        raise NumericalInstabilityError(
            f"Shift {shift:.4g} leaves the exponentials outside the float range; "
            "use a shift near the profile maximum"
        )

    probabilities = weights / total
    taus = np.asarray(profile.taus)
    map_tau = _first_argmax(taus, probabilities)
    logger.debug("Changepoint MAP tau=%d (p=%.4f)", map_tau, probabilities.max())
    return ChangepointPosterior(taus=taus, probabilities=probabilities, map_tau=map_tau)


def map_estimate(posterior: ChangepointPosterior) -> int:
    """Split with the highest posterior probability, smallest index on ties."""
    return _first_argmax(np.asarray(posterior.taus), np.asarray(posterior.probabilities))


def expected_changepoint(posterior: ChangepointPosterior) -> float:
    """Posterior mean of the split index."""
    return float(np.dot(posterior.taus, posterior.probabilities))


def changepoint_credible_set(
    posterior: ChangepointPosterior,
    level: float = 0.95,
) -> np.ndarray:
    """Smallest set of splits whose posterior mass reaches *level*.

    Splits are taken in order of decreasing probability (smaller index
    first on ties) and returned sorted ascending.
    """
    if not 0 < level < 1:
        raise InvalidInputError(f"level must be in (0, 1), got {level}")
    order = np.argsort(-posterior.probabilities, kind="stable")
    mass = np.cumsum(posterior.probabilities[order])
    # Rounding can leave the full cumulative mass a hair below level.
    count = min(int(np.searchsorted(mass, level)) + 1, len(order))
    return np.sort(np.asarray(posterior.taus)[order[:count]])
