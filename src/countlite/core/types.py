"""Dataclass return types used across CountLite.

All structured results are returned as frozen dataclasses for
immutability, dot-access, and clear ``repr`` output. Nothing here is
mutated after construction; every value is produced by a pure function
of its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy import stats

from ..exceptions import InvalidInputError

__all__ = [
    "GammaPosterior",
    "RateEstimate",
    "ChangepointProfile",
    "ChangepointPosterior",
    "SegmentFit",
    "ModelComparison",
    "ChangepointAnalysis",
]


@dataclass(frozen=True)
class GammaPosterior:
    """Gamma distribution over a Poisson rate, in shape/rate form.

    Attributes:
        shape: Shape parameter (alpha).
        rate: Rate parameter (beta), i.e. the inverse scale.
    """

    shape: float
    rate: float

    @property
    def mean(self) -> float:
        """Posterior mean ``shape / rate`` (NaN when ``rate`` is zero)."""
        if self.rate == 0:
            return float("nan")
        return self.shape / self.rate

    @property
    def variance(self) -> float:
        """Posterior variance ``shape / rate**2`` (NaN when ``rate`` is zero)."""
        if self.rate == 0:
            return float("nan")
        return self.shape / self.rate**2

    def credible_interval(self, level: float = 0.95) -> tuple[float, float]:
        """Equal-tailed credible interval for the rate.

        A zero shape (all-zero sample under the improper prior) collapses
        the distribution onto zero, giving ``(0.0, 0.0)``.
        """
        if not 0 < level < 1:
            raise InvalidInputError(f"level must be in (0, 1), got {level}")
        if self.rate <= 0:
            raise InvalidInputError("Credible interval needs a positive rate parameter")
        if self.shape == 0:
            return (0.0, 0.0)
        tail = (1.0 - level) / 2.0
        dist = stats.gamma(a=self.shape, scale=1.0 / self.rate)
        return (float(dist.ppf(tail)), float(dist.ppf(1.0 - tail)))

    def __repr__(self) -> str:
        return f"GammaPosterior(shape={self.shape:.4f}, rate={self.rate:.4f})"


@dataclass(frozen=True)
class RateEstimate:
    """Point estimate of a Poisson rate, with an optional Gamma posterior."""

    mle: float
    n: int
    total: int
    posterior: GammaPosterior | None = None

    def __repr__(self) -> str:
        post = f", posterior={self.posterior!r}" if self.posterior is not None else ""
        return f"RateEstimate(mle={self.mle:.4f}, n={self.n}{post})"


@dataclass(frozen=True)
class ChangepointProfile:
    """Unnormalised log-likelihood for every candidate split of a series.

    ``taus[i]`` is the split index (the first day of the post-change
    segment) and ``log_likelihoods[i]`` the two-segment log-likelihood
    at that split. Valid splits are ``1 .. n_obs - 1``.

    Attributes:
        taus: Candidate split indices, ascending.
        log_likelihoods: Two-segment log-likelihood per split.
        n_obs: Length of the series the profile was computed from.
        method: Search method that produced the profile.
    """

    taus: np.ndarray
    log_likelihoods: np.ndarray
    n_obs: int
    method: str = "prefix"

    def __getitem__(self, tau: int) -> float:
        if not 1 <= tau < self.n_obs:
            raise InvalidInputError(
                f"Split index {tau} outside the valid range 1..{self.n_obs - 1}"
            )
        return float(self.log_likelihoods[tau - 1])

    def __len__(self) -> int:
        return len(self.taus)

    def to_series(self) -> pd.Series:
        """Return the profile as a Series indexed by split index."""
        return pd.Series(
            self.log_likelihoods, index=pd.Index(self.taus, name="tau"),
            name="log_likelihood",
        )

    def __repr__(self) -> str:
        best = int(self.taus[int(np.argmax(self.log_likelihoods))])
        return (
            f"ChangepointProfile(n_obs={self.n_obs}, splits={len(self.taus)}, "
            f"argmax={best}, method={self.method!r})"
        )


@dataclass(frozen=True)
class ChangepointPosterior:
    """Normalised discrete posterior over the changepoint location.

    Attributes:
        taus: Candidate split indices, ascending.
        probabilities: Posterior probability per split; sums to 1.
        map_tau: Maximum-a-posteriori split (smallest index on ties).
    """

    taus: np.ndarray
    probabilities: np.ndarray
    map_tau: int

    @property
    def map_probability(self) -> float:
        return float(self.probabilities[self.map_tau - int(self.taus[0])])

    def probability(self, tau: int) -> float:
        """Posterior probability of a single split index."""
        idx = tau - int(self.taus[0])
        if not 0 <= idx < len(self.taus):
            raise InvalidInputError(
                f"Split index {tau} outside the valid range "
                f"{int(self.taus[0])}..{int(self.taus[-1])}"
            )
        return float(self.probabilities[idx])

    def to_series(self) -> pd.Series:
        """Return the posterior as a Series indexed by split index."""
        return pd.Series(
            self.probabilities, index=pd.Index(self.taus, name="tau"),
            name="probability",
        )

    def __repr__(self) -> str:
        return (
            f"ChangepointPosterior(map_tau={self.map_tau}, "
            f"p_map={self.map_probability:.3f}, splits={len(self.taus)})"
        )


@dataclass(frozen=True)
class SegmentFit:
    """Rate estimates either side of a chosen split."""

    tau: int
    before: RateEstimate
    after: RateEstimate

    @property
    def rate_ratio(self) -> float:
        """``after.mle / before.mle`` (``inf`` if the pre-change rate is zero)."""
        if self.before.mle == 0:
            return float("inf") if self.after.mle > 0 else float("nan")
        return self.after.mle / self.before.mle

    def __repr__(self) -> str:
        return (
            f"SegmentFit(tau={self.tau}, before={self.before.mle:.4f}, "
            f"after={self.after.mle:.4f})"
        )


@dataclass(frozen=True)
class ModelComparison:
    """Single-rate versus two-segment model statistics.

    Lower AIC/ICOMP and a Bayes factor well above 1 both favour the
    two-segment model. No accept/reject decision is made here.
    """

    log_likelihood_single: float
    log_likelihood_two: float
    log_bayes_factor: float
    bayes_factor: float
    aic_single: float
    aic_two: float
    icomp_single: float
    icomp_two: float

    @property
    def delta_aic(self) -> float:
        """``aic_two - aic_single``; negative favours the changepoint model."""
        return self.aic_two - self.aic_single

    def __repr__(self) -> str:
        return (
            f"ModelComparison(log_bf={self.log_bayes_factor:.3f}, "
            f"aic_single={self.aic_single:.2f}, aic_two={self.aic_two:.2f}, "
            f"icomp_single={self.icomp_single:.2f}, icomp_two={self.icomp_two:.2f})"
        )


@dataclass(frozen=True)
class ChangepointAnalysis:
    """Complete output of :func:`countlite.analysis.analyze`.

    Attributes:
        rate: Whole-series MLE with its Gamma posterior.
        profile: Log-likelihood profile over split indices.
        posterior: Normalised changepoint posterior.
        segments: Per-segment rate estimates at the MAP split.
        comparison: Model comparison statistics.
        credible_set: Smallest set of splits holding the configured
            posterior mass, ascending.
        expected_tau: Posterior mean of the split index.
        rate_intervals: Equal-tailed credible intervals for the
            ``"overall"``, ``"before"`` and ``"after"`` rates.
        changepoint_date: First post-change date when the input carried
            a ``DatetimeIndex``, else ``None``.
    """

    rate: RateEstimate
    profile: ChangepointProfile
    posterior: ChangepointPosterior
    segments: SegmentFit
    comparison: ModelComparison
    credible_set: np.ndarray
    expected_tau: float
    rate_intervals: dict[str, tuple[float, float]]
    changepoint_date: object | None = None

    @property
    def map_tau(self) -> int:
        return self.posterior.map_tau

    def __repr__(self) -> str:
        loc = self.changepoint_date if self.changepoint_date is not None else self.map_tau
        return (
            f"ChangepointAnalysis(loc={loc}, "
            f"p_map={self.posterior.map_probability:.3f}, "
            f"rates=({self.segments.before.mle:.3f} -> {self.segments.after.mle:.3f}), "
            f"log_bf={self.comparison.log_bayes_factor:.2f})"
        )
