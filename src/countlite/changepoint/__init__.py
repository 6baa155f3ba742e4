"""Changepoint: exhaustive split search and posterior normalisation."""

from .posterior import (
    changepoint_credible_set,
    expected_changepoint,
    map_estimate,
    normalize,
)
from .search import evaluate, split_score

__all__ = [
    "changepoint_credible_set",
    "evaluate",
    "expected_changepoint",
    "map_estimate",
    "normalize",
    "split_score",
]
