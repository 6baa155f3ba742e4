"""Tests for changepoint posterior normalisation."""

from __future__ import annotations

import numpy as np
import pytest

from countlite.changepoint.posterior import (
    changepoint_credible_set,
    expected_changepoint,
    map_estimate,
    normalize,
)
from countlite.changepoint.search import evaluate
from countlite.core.types import ChangepointProfile
from countlite.exceptions import InvalidInputError, NumericalInstabilityError


def _profile(values: list[float]) -> ChangepointProfile:
    return ChangepointProfile(
        taus=np.arange(1, len(values) + 1),
        log_likelihoods=np.asarray(values, dtype=float),
        n_obs=len(values) + 1,
    )


class TestNormalize:
    def test_sums_to_one_for_large_negative_log_likelihoods(self) -> None:
        posterior = normalize(_profile([-3700.0, -3701.0, -3705.0, -3720.0]))
        assert posterior.probabilities.sum() == pytest.approx(1.0, abs=1e-9)
        assert np.all(posterior.probabilities >= 0)
        assert posterior.probabilities[0] == pytest.approx(
            1.0 / (1.0 + np.exp(-1.0) + np.exp(-5.0) + np.exp(-20.0))
        )

    def test_shift_invariance(self) -> None:
        profile = _profile([-812.4, -809.9, -815.2, -811.0])
        top = profile.log_likelihoods.max()
        reference = normalize(profile).probabilities
        for shift in (top - 30.0, top + 12.5, -800.0):
            np.testing.assert_allclose(
                normalize(profile, shift=shift).probabilities, reference, rtol=1e-12
            )

    def test_shift_far_above_maximum_loses_small_terms(self) -> None:
        profile = _profile([-10.0, -100.0])
        assert normalize(profile).probabilities[1] > 0.0
        # exp(-800) underflows while exp(-710) does not, so no error is raised.
        assert normalize(profile, shift=700.0).probabilities[1] == 0.0

    def test_length_two_series_is_certain(self) -> None:
        posterior = normalize(evaluate([4, 19]))
        assert posterior.map_tau == 1
        assert posterior.probabilities[0] == 1.0

    def test_minus_infinity_entries_get_zero_mass(self) -> None:
        posterior = normalize(_profile([-np.inf, -10.0, -11.0]))
        assert posterior.probabilities[0] == 0.0
        assert posterior.map_tau == 2

    def test_all_minus_infinity_is_unstable(self) -> None:
        with pytest.raises(NumericalInstabilityError):
            normalize(_profile([-np.inf, -np.inf]))

    def test_nan_is_unstable(self) -> None:
        with pytest.raises(NumericalInstabilityError, match="NaN"):
            normalize(_profile([-1.0, np.nan]))

    def test_overflowing_shift_is_unstable(self) -> None:
        profile = _profile([-3700.0, -3702.0])
        with pytest.raises(NumericalInstabilityError, match="float range"):
            normalize(profile, shift=-3700.0 - 1000.0)

    def test_underflowing_shift_is_unstable(self) -> None:
        with pytest.raises(NumericalInstabilityError):
            normalize(_profile([-3700.0, -3702.0]), shift=0.0)


class TestMapEstimate:
    def test_ties_resolve_to_smallest_index(self) -> None:
        posterior = normalize(_profile([-5.0, -2.0, -2.0, -9.0]))
        assert posterior.map_tau == 2
        assert map_estimate(posterior) == 2

    def test_matches_argmax(self) -> None:
        posterior = normalize(_profile([-7.0, -3.0, -4.0]))
        assert map_estimate(posterior) == 2
        assert posterior.map_probability == posterior.probabilities.max()

    def test_flat_series_is_diffuse(self) -> None:
        posterior = normalize(evaluate([20] * 100))
        assert posterior.probabilities.max() <= 0.5
        assert posterior.probabilities.sum() == pytest.approx(1.0, abs=1e-9)


class TestSummaries:
    def test_expected_changepoint_within_range(self) -> None:
        posterior = normalize(_profile([-3.0, -1.0, -3.0]))
        assert expected_changepoint(posterior) == pytest.approx(2.0)

    def test_credible_set_contains_map(self) -> None:
        posterior = normalize(_profile([-9.0, -2.0, -2.5, -8.0, -20.0]))
        cset = changepoint_credible_set(posterior, level=0.9)
        assert posterior.map_tau in cset
        mass = sum(posterior.probability(int(t)) for t in cset)
        assert mass >= 0.9
        assert list(cset) == sorted(cset)

    def test_credible_set_single_dominant_split(self) -> None:
        posterior = normalize(_profile([-100.0, 0.0, -100.0]))
        np.testing.assert_array_equal(changepoint_credible_set(posterior, 0.95), [2])

    def test_credible_set_level_validated(self) -> None:
        posterior = normalize(_profile([-1.0, -2.0]))
        with pytest.raises(InvalidInputError, match="level"):
            changepoint_credible_set(posterior, level=0.0)

    def test_probability_lookup_out_of_range(self) -> None:
        posterior = normalize(_profile([-1.0, -2.0]))
        with pytest.raises(InvalidInputError):
            posterior.probability(5)
