"""
Input errors raised by the distance layer.

Everything derives from `ValueError` so callers that already catch bad-input
errors keep working; catch `InvalidInputError` to handle both kinds at once.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Base class for coordinates the distance function refuses to evaluate."""


class ShapeMismatchError(InvalidInputError):
    """Target latitude/longitude collections are not aligned (length or kind)."""


class InvalidValueError(InvalidInputError):
    """A coordinate is NaN, infinite, non-numeric, or out of range in strict mode."""
