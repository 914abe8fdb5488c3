"""
Mean statistics class.
"""

from __future__ import annotations

import math


class Mean:
    """
    Running mean calculation.

    Keeps the sample count and sum, so it doubles as a counted total.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Reset all statistics."""
        self._max: float = -math.inf
        self._sum: float = 0.0
        self._mean: float = 0.0
        self._number: int = 0

    def set_value(self, value: float) -> None:
        """Add a sample value."""
        if value > self._max:
            self._max = value
        self._sum += value
        self._number += 1
        self._mean = self._sum / self._number

    def __iadd__(self, value: float) -> Mean:
        """Operator += equivalent."""
        self.set_value(value)
        return self

    @property
    def number_of_samples(self) -> int:
        """Number of samples collected."""
        return self._number

    @property
    def max(self) -> float:
        """Maximum value seen (-inf before the first sample)."""
        return self._max

    @property
    def sum(self) -> float:
        """Sum of all values."""
        return self._sum

    @property
    def mean(self) -> float:
        """Current mean value."""
        return self._mean
