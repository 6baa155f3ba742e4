"""Exception types raised by CountLite."""

from __future__ import annotations

__all__ = [
    "CountLiteError",
    "InvalidInputError",
    "NumericalInstabilityError",
]


class CountLiteError(Exception):
    """Base class for all CountLite errors."""


class InvalidInputError(CountLiteError, ValueError):
    """Raised when an argument is outside the domain of the computation.

    Covers empty or too-short series, negative or non-integer counts,
    non-positive rates, negative prior parameters and out-of-range
    changepoint indices.
    """


class NumericalInstabilityError(CountLiteError, ArithmeticError):
    """Raised when a result would be undefined even after log-domain shifting.

    Only raised where the alternative is a NaN (``0/0`` or ``inf/inf``).
    A well-defined value that merely saturates the float range, such as a
    Bayes factor of ``inf``, is returned as-is.
    """
