"""Point and posterior estimates of a single Poisson rate.

With a Gamma(alpha0, beta0) prior on the rate and ``n`` Poisson counts
summing to ``S``, the posterior is Gamma(alpha0 + S, beta0 + n). Under
the improper prior ``alpha0 = beta0 = 0`` the posterior mean equals the
maximum-likelihood estimate ``S / n`` exactly.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..core.types import GammaPosterior, RateEstimate
from ..exceptions import InvalidInputError
from ..series import as_count_array

__all__ = [
    "mle",
    "bayesian_update",
    "posterior_mean",
    "credible_interval",
    "estimate_rate",
]


def mle(sample: Sequence[int] | np.ndarray) -> float:
    """Maximum-likelihood Poisson rate: the arithmetic mean of the sample.

    Raises:
        InvalidInputError: If the sample is empty or not a valid count sample.
    """
    arr = as_count_array(sample, min_length=1)
    return int(arr.sum()) / len(arr)


def bayesian_update(
    sample: Sequence[int] | np.ndarray,
    prior_shape: float = 0.0,
    prior_rate: float = 0.0,
) -> GammaPosterior:
    """Gamma-conjugate posterior for a Poisson rate.

    Args:
        sample: Observed counts. May be empty, in which case the
            posterior equals the prior.
        prior_shape: Prior shape ``alpha0 >= 0``.
        prior_rate: Prior rate ``beta0 >= 0``.

    Returns:
        ``GammaPosterior(alpha0 + sum(sample), beta0 + len(sample))``.
    """
    if prior_shape < 0 or prior_rate < 0:
        raise InvalidInputError(
            f"Prior parameters must be non-negative, got shape={prior_shape}, "
            f"rate={prior_rate}"
        )
    arr = as_count_array(sample, min_length=0)
    return GammaPosterior(
        shape=float(prior_shape) + int(arr.sum()),
        rate=float(prior_rate) + len(arr),
    )


def posterior_mean(posterior: GammaPosterior) -> float:
    """Posterior mean ``shape / rate``.

    Raises:
        InvalidInputError: If ``rate`` is zero, which happens only when
            both the prior rate and the sample size are zero.
    """
    if posterior.rate == 0:
        raise InvalidInputError(
            "Posterior mean undefined: rate parameter is zero "
            "(empty sample with a zero prior rate)"
        )
    return posterior.shape / posterior.rate


def credible_interval(
    posterior: GammaPosterior,
    level: float = 0.95,
) -> tuple[float, float]:
    """Equal-tailed credible interval for the rate.

    See :meth:`GammaPosterior.credible_interval`.
    """
    return posterior.credible_interval(level)


def estimate_rate(
    sample: Sequence[int] | np.ndarray,
    prior_shape: float = 0.0,
    prior_rate: float = 0.0,
) -> RateEstimate:
    """MLE and Gamma posterior for *sample* in one value object."""
    arr = as_count_array(sample, min_length=1)
    return RateEstimate(
        mle=mle(arr),
        n=len(arr),
        total=int(arr.sum()),
        posterior=bayesian_update(arr, prior_shape, prior_rate),
    )
