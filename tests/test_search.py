"""Tests for the exhaustive changepoint search."""

from __future__ import annotations

import numpy as np
import pytest

from countlite.changepoint.search import evaluate, split_score
from countlite.estimation.likelihood import poisson_log_likelihood
from countlite.exceptions import InvalidInputError


@pytest.fixture()
def regime_shift() -> np.ndarray:
    """60 days at rate 10 followed by 60 days at rate 50."""
    rng = np.random.default_rng(42)
    return np.concatenate([rng.poisson(10, 60), rng.poisson(50, 60)])


class TestSplitScore:
    def test_sum_of_segment_likelihoods(self) -> None:
        series = np.array([2, 3, 1, 9, 11, 10])
        expected = poisson_log_likelihood(series[:3]) + poisson_log_likelihood(series[3:])
        assert split_score(series, 3) == pytest.approx(expected)

    @pytest.mark.parametrize("tau", [0, 6, -1])
    def test_out_of_range_split(self, tau: int) -> None:
        with pytest.raises(InvalidInputError, match="outside"):
            split_score(np.array([1, 2, 3, 4, 5, 6]), tau)


class TestEvaluate:
    def test_profile_covers_valid_splits_only(self, regime_shift: np.ndarray) -> None:
        profile = evaluate(regime_shift)
        assert len(profile) == len(regime_shift) - 1
        np.testing.assert_array_equal(profile.taus, np.arange(1, len(regime_shift)))
        assert np.all(np.isfinite(profile.log_likelihoods))

    def test_prefix_and_naive_agree(self, regime_shift: np.ndarray) -> None:
        prefix = evaluate(regime_shift, method="prefix")
        naive = evaluate(regime_shift, method="naive")
        np.testing.assert_allclose(
            prefix.log_likelihoods, naive.log_likelihoods, rtol=1e-10, atol=1e-8
        )

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_prefix_and_naive_agree_on_random_series(self, seed: int) -> None:
        rng = np.random.default_rng(seed)
        n = int(rng.integers(2, 80))
        series = rng.poisson(rng.uniform(0.1, 300), size=n)
        np.testing.assert_allclose(
            evaluate(series, method="prefix").log_likelihoods,
            evaluate(series, method="naive").log_likelihoods,
            rtol=1e-10, atol=1e-8,
        )

    def test_parallel_naive_is_bit_identical(self, regime_shift: np.ndarray) -> None:
        serial = evaluate(regime_shift, method="naive", n_jobs=1)
        parallel = evaluate(regime_shift, method="naive", n_jobs=4)
        np.testing.assert_array_equal(serial.log_likelihoods, parallel.log_likelihoods)

    def test_peak_at_true_split(self, regime_shift: np.ndarray) -> None:
        profile = evaluate(regime_shift)
        best = int(profile.taus[np.argmax(profile.log_likelihoods)])
        assert 55 <= best <= 65

    def test_order_matters(self) -> None:
        series = np.array([1, 2, 1, 30, 28, 33, 2, 1])
        forward = evaluate(series).log_likelihoods
        backward = evaluate(series[::-1]).log_likelihoods
        # Reversal maps split tau onto n - tau.
        np.testing.assert_allclose(forward, backward[::-1], rtol=1e-12)
        assert not np.allclose(forward, backward)

    def test_zero_segment(self) -> None:
        profile = evaluate([0, 0, 0, 5, 5, 5])
        assert np.all(np.isfinite(profile.log_likelihoods))
        assert int(profile.taus[np.argmax(profile.log_likelihoods)]) == 3
        np.testing.assert_allclose(
            profile.log_likelihoods,
            evaluate([0, 0, 0, 5, 5, 5], method="naive").log_likelihoods,
            rtol=1e-12,
        )

    def test_length_two(self) -> None:
        profile = evaluate([3, 7])
        np.testing.assert_array_equal(profile.taus, [1])
        assert profile[1] == pytest.approx(
            poisson_log_likelihood([3]) + poisson_log_likelihood([7])
        )

    def test_lookup_out_of_range(self) -> None:
        profile = evaluate([3, 7, 9])
        with pytest.raises(InvalidInputError):
            profile[0]
        with pytest.raises(InvalidInputError):
            profile[3]

    def test_to_series(self) -> None:
        series = evaluate([1, 2, 8, 9]).to_series()
        assert list(series.index) == [1, 2, 3]
        assert series.index.name == "tau"


class TestEvaluateErrors:
    def test_length_one_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="at least 2"):
            evaluate([5])

    def test_unknown_method(self) -> None:
        with pytest.raises(InvalidInputError, match="Unknown method"):
            evaluate([1, 2, 3], method="binary")

    def test_bad_n_jobs(self) -> None:
        with pytest.raises(InvalidInputError, match="n_jobs"):
            evaluate([1, 2, 3], method="naive", n_jobs=0)

    def test_two_dimensional_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="one-dimensional"):
            evaluate(np.ones((3, 3), dtype=int))
