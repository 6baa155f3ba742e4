"""CountLite: Poisson rate estimation and changepoint detection for daily counts.

Provides maximum-likelihood and Gamma-conjugate rate estimates, a
numerically stable Poisson log-likelihood, an exhaustive single
changepoint search with a normalised posterior over its location, and
single-rate versus two-segment model comparison (Bayes factor, AIC,
ICOMP).
"""

__version__ = "0.1.0"

from .analysis import AnalysisConfig, analyze
from .changepoint import (
    changepoint_credible_set,
    evaluate,
    expected_changepoint,
    map_estimate,
    normalize,
    split_score,
)
from .comparison import (
    aic,
    bayes_factor,
    compare_models,
    icomp,
    information_complexity,
    log_bayes_factor,
)
from .core.types import (
    ChangepointAnalysis,
    ChangepointPosterior,
    ChangepointProfile,
    GammaPosterior,
    ModelComparison,
    RateEstimate,
    SegmentFit,
)
from .estimation import (
    bayesian_update,
    credible_interval,
    estimate_rate,
    mle,
    poisson_fisher_inverse,
    poisson_log_likelihood,
    posterior_mean,
)
from .exceptions import CountLiteError, InvalidInputError, NumericalInstabilityError
from .simulation import simulate_counts

__all__ = [
    # Analysis
    "analyze",
    "AnalysisConfig",
    # Rate estimation
    "mle",
    "bayesian_update",
    "posterior_mean",
    "credible_interval",
    "estimate_rate",
    # Likelihood
    "poisson_log_likelihood",
    "poisson_fisher_inverse",
    # Changepoint search and posterior
    "evaluate",
    "split_score",
    "normalize",
    "map_estimate",
    "expected_changepoint",
    "changepoint_credible_set",
    # Model comparison
    "log_bayes_factor",
    "bayes_factor",
    "aic",
    "icomp",
    "information_complexity",
    "compare_models",
    # Types
    "GammaPosterior",
    "RateEstimate",
    "ChangepointProfile",
    "ChangepointPosterior",
    "SegmentFit",
    "ModelComparison",
    "ChangepointAnalysis",
    # Errors
    "CountLiteError",
    "InvalidInputError",
    "NumericalInstabilityError",
    # Simulation
    "simulate_counts",
]
