"""Comparison of the single-rate and two-segment Poisson models.

Three statistics are reported, none of which is turned into an
accept/reject decision:

* the likelihood ratio (Bayes factor under the profiled rates),
  ``exp(logL_two - logL_single)``, evaluated with a log-domain shift;
* AIC, ``-2 logL + 2k`` with ``k = 1`` for the single-rate model and
  ``k = 3`` (``tau``, ``lam1``, ``lam2``) for the changepoint model;
* ICOMP, ``-2 logL + 2 C1(F^-1)`` with Bozdogan's C1 complexity of the
  inverse Fisher information.

Every rate in these models is a separately estimated scalar with
Fisher information ``n / lam``. C1 is therefore evaluated block-wise on
1x1 inverses, where trace and determinant coincide and C1 is
identically zero.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from .core.types import ModelComparison
from .exceptions import InvalidInputError, NumericalInstabilityError

__all__ = [
    "SINGLE_RATE_PARAMS",
    "CHANGEPOINT_PARAMS",
    "log_bayes_factor",
    "bayes_factor",
    "aic",
    "information_complexity",
    "icomp",
    "compare_models",
]

logger = logging.getLogger(__name__)

SINGLE_RATE_PARAMS = 1
CHANGEPOINT_PARAMS = 3


def _check_log_likelihood(value: float, name: str) -> float:
    value = float(value)
    if math.isnan(value) or value == math.inf:
        raise NumericalInstabilityError(f"{name} must be finite or -inf, got {value}")
    return value


def log_bayes_factor(log_likelihood_single: float, log_likelihood_two: float) -> float:
    """``logL_two - logL_single``, the log of the likelihood ratio."""
    single = _check_log_likelihood(log_likelihood_single, "log_likelihood_single")
    two = _check_log_likelihood(log_likelihood_two, "log_likelihood_two")
    if single == -math.inf and two == -math.inf:
        raise NumericalInstabilityError("Both models have zero likelihood")
    return two - single


def bayes_factor(
    log_likelihood_single: float,
    log_likelihood_two: float,
    shift: float | None = None,
) -> float:
    """Likelihood ratio of the two-segment model over the single-rate model.

    Both log-likelihoods are shifted by a common constant before
    exponentiating, so the ratio survives even when ``exp(logL)`` of
    either model underflows. If either shifted exponential underflows to
    zero or overflows under a caller-supplied *shift*, the ratio is
    taken from the max-shifted pair instead, which is always
    well-defined.

    The result saturates to ``inf`` or ``0.0`` when the ratio itself is
    beyond the float range; :func:`log_bayes_factor` is exact.

    Raises:
        NumericalInstabilityError: On NaN or ``+inf`` inputs, or when
            both log-likelihoods are ``-inf``.
    """
    log_bayes_factor(log_likelihood_single, log_likelihood_two)
    single = float(log_likelihood_single)
    two = float(log_likelihood_two)

    if shift is None:
        shift = max(single, two)
    with np.errstate(over="ignore", under="ignore", divide="ignore"):
        numerator = np.exp(two - shift)
        denominator = np.exp(single - shift)
        if not (0 < numerator < np.inf and 0 < denominator < np.inf):
            # Saturated under the given shift; the max shift keeps one term at 1.
            shift = max(single, two)
            numerator = np.exp(two - shift)
            denominator = np.exp(single - shift)
        ratio = float(numerator / denominator)

    if not math.isfinite(ratio) or ratio == 0:
        logger.debug(
            "Bayes factor saturated to %s (log Bayes factor %.3f)", ratio, two - single
        )
    return ratio


def aic(log_likelihood: float, k: int) -> float:
    """Akaike Information Criterion ``-2 logL + 2k``."""
    if k < 0:
        raise InvalidInputError(f"Parameter count must be non-negative, got {k}")
    return -2.0 * float(log_likelihood) + 2.0 * k


def _blocks(fisher_inverse: float | Sequence[float] | np.ndarray) -> np.ndarray:
    arr = np.asarray(fisher_inverse, dtype=np.float64)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim == 1:
        return arr
    if arr.ndim == 2 and arr.shape[0] == arr.shape[1]:
        if np.any(arr - np.diag(np.diag(arr))):
            raise InvalidInputError(
                "Only independent single-rate blocks are supported; "
                "the inverse Fisher information must be diagonal"
            )
        return np.diag(arr)
    raise InvalidInputError(
        f"Inverse Fisher information must be a scalar, vector of scalars or "
        f"square diagonal matrix, got shape {arr.shape}"
    )


def _c1_scalar(variance: float) -> float:
    if not math.isfinite(variance) or variance < 0:
        raise InvalidInputError(f"Inverse Fisher information must be non-negative, got {variance}")
    if variance == 0:
        # Degenerate all-zero segment: the posterior is a point mass.
        return 0.0
    # s = 1: (s/2) log(tr / s) - (1/2) log det
    return 0.5 * math.log(variance) - 0.5 * math.log(variance)


def information_complexity(fisher_inverse: float | Sequence[float] | np.ndarray) -> float:
    """C1 complexity summed over independent single-rate blocks.

    Args:
        fisher_inverse: A scalar or 1x1 inverse Fisher information, a
            vector with one scalar per independently estimated rate, or
            a diagonal matrix of such scalars.

    Returns:
        The total C1 complexity, which is ``0.0`` for every valid input.
    """
    return float(sum(_c1_scalar(float(v)) for v in _blocks(fisher_inverse)))


def icomp(
    log_likelihood: float,
    fisher_inverse: float | Sequence[float] | np.ndarray,
) -> float:
    """Information complexity criterion ``-2 logL + 2 C1(F^-1)``."""
    return -2.0 * float(log_likelihood) + 2.0 * information_complexity(fisher_inverse)


def compare_models(
    log_likelihood_single: float,
    log_likelihood_two: float,
    fisher_inverse_single: float | Sequence[float] | np.ndarray,
    fisher_inverse_two: float | Sequence[float] | np.ndarray,
) -> ModelComparison:
    """Compute every comparison statistic in one pass.

    Args:
        log_likelihood_single: Log-likelihood of the single-rate model.
        log_likelihood_two: Two-segment log-likelihood at the chosen split.
        fisher_inverse_single: Inverse Fisher information of the
            single rate.
        fisher_inverse_two: Inverse Fisher information of the two
            segment rates, one scalar per segment.
    """
    log_bf = log_bayes_factor(log_likelihood_single, log_likelihood_two)
    comparison = ModelComparison(
        log_likelihood_single=float(log_likelihood_single),
        log_likelihood_two=float(log_likelihood_two),
        log_bayes_factor=log_bf,
        bayes_factor=bayes_factor(log_likelihood_single, log_likelihood_two),
        aic_single=aic(log_likelihood_single, SINGLE_RATE_PARAMS),
        aic_two=aic(log_likelihood_two, CHANGEPOINT_PARAMS),
        icomp_single=icomp(log_likelihood_single, fisher_inverse_single),
        icomp_two=icomp(log_likelihood_two, fisher_inverse_two),
    )
    logger.debug("Model comparison: %r", comparison)
    return comparison
