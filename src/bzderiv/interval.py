"""Closed magnitude intervals"""

from __future__ import annotations

import math
from dataclasses import dataclass

from bzderiv.consts import (
    INTERVAL_APPROX_ATOL,
    INTERVAL_APPROX_RTOL,
    INTERVAL_CONTAINS_TOL,
)


###############################################################################
# Interval
###############################################################################
@dataclass(frozen=True)
class Interval:
    """
    Represents a closed interval [min_value, max_value].

    Used to bound the magnitude of a Bezier curve derivative over the parameter
    range [0, 1]. Instances are immutable.

    Attributes:
        min_value (float): The lower bound.
        max_value (float): The upper bound.
    """

    _min_value: float
    _max_value: float

    def __init__(self, min_value: float, max_value: float):
        """Initialize Interval with its bounds.

        Args:
            min_value: The lower bound
            max_value: The upper bound

        Raises:
            ValueError: If min_value is larger than max_value
        """
        if min_value > max_value:
            raise ValueError(f"Interval min_value {min_value} is larger than max_value {max_value}")
        object.__setattr__(self, "_min_value", float(min_value))
        object.__setattr__(self, "_max_value", float(max_value))

    @property
    def min_value(self) -> float:
        """float: The lower bound."""
        return self._min_value

    @property
    def max_value(self) -> float:
        """float: The upper bound."""
        return self._max_value

    @property
    def width(self) -> float:
        """float: The width of the interval (difference between max_value and min_value)."""

        return self._max_value - self._min_value

    @property
    def midpoint(self) -> float:
        """float: The center of the interval."""

        return (self._min_value + self._max_value) / 2

    def contains(self, value: float, tol: float = INTERVAL_CONTAINS_TOL) -> bool:
        """
        Check whether _value_ lies inside the interval.

        Args:
            value (float): The value to check.
            tol (float): Absolute slack applied to both bounds.

        Returns:
            bool: True if min_value - tol <= value <= max_value + tol
        """
        return self._min_value - tol <= value <= self._max_value + tol

    def hull(self, other: Interval) -> Interval:
        """Smallest interval containing both this and the _other_ interval."""
        return Interval(min(self._min_value, other.min_value), max(self._max_value, other.max_value))

    def scale(self, factor: float) -> Interval:
        """
        Scale both bounds by a non-negative factor.

        Args:
            factor (float): The scale factor.

        Returns:
            Interval: The scaled interval

        Raises:
            ValueError: If factor is negative
        """
        if factor < 0:
            raise ValueError(f"Interval scale factor must not be negative, got {factor}")
        return Interval(self._min_value * factor, self._max_value * factor)

    def approx_equal(
        self, other: Interval, rtol: float = INTERVAL_APPROX_RTOL, atol: float = INTERVAL_APPROX_ATOL
    ) -> bool:
        """Check if both bounds are approximately equal to the bounds of _other_.

        Args:
            other: Interval to compare with
            rtol: Relative tolerance
            atol: Absolute tolerance

        Returns:
            True if both bounds match within tolerance, False otherwise
        """
        if not isinstance(other, Interval):
            return False
        return math.isclose(self._min_value, other.min_value, rel_tol=rtol, abs_tol=atol) and math.isclose(
            self._max_value, other.max_value, rel_tol=rtol, abs_tol=atol
        )

    @classmethod
    def from_dict(cls, data: dict) -> Interval:
        """Create an Interval instance from a dictionary."""
        return cls(
            min_value=data.get("min_value", 0.0),
            max_value=data.get("max_value", 0.0),
        )

    def __str__(self):
        """Returns a string representation of the Interval instance."""
        return f"Interval(min_value={self.min_value}, max_value={self.max_value}, width={self.width})"

    def to_dict(self) -> dict:
        """Convert the Interval instance to a dictionary."""
        return {
            "min_value": self.min_value,
            "max_value": self.max_value,
        }
