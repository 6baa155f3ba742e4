"""End-to-end single-changepoint analysis of a daily count series.

Example::

    import countlite as cl

    counts = cl.simulate_counts(rates=[10, 50], lengths=[60, 60], seed=7)
    result = cl.analyze(counts)
    print(result.map_tau, result.segments, result.comparison.delta_aic)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .changepoint.posterior import (
    changepoint_credible_set,
    expected_changepoint,
    normalize,
)
from .changepoint.search import evaluate
from .comparison import compare_models
from .core.types import ChangepointAnalysis, SegmentFit
from .estimation.likelihood import poisson_fisher_inverse, poisson_log_likelihood
from .estimation.rate import credible_interval, estimate_rate
from .exceptions import InvalidInputError
from .series import as_count_series, series_dates

__all__ = [
    "AnalysisConfig",
    "analyze",
]

logger = logging.getLogger(__name__)


@dataclass
class AnalysisConfig:
    """Configuration for an analysis run.

    Attributes:
        prior_shape: Gamma prior shape for every rate (0 = improper flat).
        prior_rate: Gamma prior rate for every rate.
        method: Split search method: ``"prefix"`` or ``"naive"``.
        n_jobs: Worker threads for the naive search.
        credible_level: Level for rate credible intervals and the
            changepoint credible set.
    """

    prior_shape: float = 0.0
    prior_rate: float = 0.0
    method: str = "prefix"
    n_jobs: int = 1
    credible_level: float = 0.95

    def validate(self) -> None:
        """Raise :class:`InvalidInputError` on an inconsistent configuration."""
        if self.prior_shape < 0 or self.prior_rate < 0:
            raise InvalidInputError("Prior parameters must be non-negative")
        if self.method not in ("prefix", "naive"):
            raise InvalidInputError(
                f"Unknown method: {self.method}. Use 'prefix' or 'naive'."
            )
        if self.n_jobs < 1:
            raise InvalidInputError(f"n_jobs must be at least 1, got {self.n_jobs}")
        if not 0 < self.credible_level < 1:
            raise InvalidInputError(
                f"credible_level must be in (0, 1), got {self.credible_level}"
            )


def analyze(
    series: Sequence[int] | np.ndarray | pd.Series,
    config: AnalysisConfig | None = None,
) -> ChangepointAnalysis:
    """Estimate the rate of a count series and locate a single changepoint.

    Args:
        series: Chronologically ordered, zero-filled daily counts. A
            ``pandas.Series`` with a ``DatetimeIndex`` additionally
            yields the date of the first post-change day.
        config: Analysis settings. Defaults to :class:`AnalysisConfig()`.

    Returns:
        A :class:`ChangepointAnalysis` with the whole-series rate, the
        split profile and posterior, per-segment rates at the MAP split
        and the model comparison.

    Raises:
        InvalidInputError: On invalid counts, a series shorter than 2,
            or an invalid configuration.
        NumericalInstabilityError: If the profile cannot be normalised.
    """
    config = config or AnalysisConfig()
    config.validate()

    dates = series_dates(series)
    arr = as_count_series(series)
    n = len(arr)

    rate = estimate_rate(arr, config.prior_shape, config.prior_rate)
    profile = evaluate(arr, method=config.method, n_jobs=config.n_jobs)
    posterior = normalize(profile)
    tau = posterior.map_tau

    segments = SegmentFit(
        tau=tau,
        before=estimate_rate(arr[:tau], config.prior_shape, config.prior_rate),
        after=estimate_rate(arr[tau:], config.prior_shape, config.prior_rate),
    )
    comparison = compare_models(
        log_likelihood_single=poisson_log_likelihood(arr),
        log_likelihood_two=profile[tau],
        fisher_inverse_single=poisson_fisher_inverse(n, rate.mle),
        fisher_inverse_two=[
            poisson_fisher_inverse(segments.before.n, segments.before.mle),
            poisson_fisher_inverse(segments.after.n, segments.after.mle),
        ],
    )

    rate_intervals = {
        name: credible_interval(est.posterior, config.credible_level)
        for name, est in (
            ("overall", rate), ("before", segments.before), ("after", segments.after),
        )
    }

    changepoint_date = dates[tau] if dates is not None else None
    logger.info(
        "Changepoint at tau=%d of %d (p=%.3f), rate %.3f -> %.3f",
        tau, n, posterior.map_probability, segments.before.mle, segments.after.mle,
    )
    return ChangepointAnalysis(
        rate=rate,
        profile=profile,
        posterior=posterior,
        segments=segments,
        comparison=comparison,
        credible_set=changepoint_credible_set(posterior, config.credible_level),
        expected_tau=expected_changepoint(posterior),
        rate_intervals=rate_intervals,
        changepoint_date=changepoint_date,
    )
