"""Estimation: Poisson rate estimates and log-likelihood evaluation."""

from .likelihood import (
    fitted_log_likelihood,
    log_factorials,
    poisson_fisher_inverse,
    poisson_log_likelihood,
)
from .rate import (
    bayesian_update,
    credible_interval,
    estimate_rate,
    mle,
    posterior_mean,
)

__all__ = [
    "bayesian_update",
    "credible_interval",
    "estimate_rate",
    "fitted_log_likelihood",
    "log_factorials",
    "mle",
    "poisson_fisher_inverse",
    "poisson_log_likelihood",
    "posterior_mean",
]
