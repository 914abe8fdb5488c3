"""
Random number streams for the gas station model.

Every stream is an independent copy of the 48-bit linear congruential
generator behind java.util.Random, so a run is reproducible bit for bit
from its four seeds, and any implementation using the same generator
replays the same trace.

Algorithm sources:
- LCG: Knuth Vol 2, section 3.2.1 (multiplier 0x5DEECE66D, increment 11)
- 53-bit doubles: two draws of 26 and 27 bits
- Normal deviates: Marsaglia polar method (Knuth Vol 2, section 3.4.1)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pumpsim.config import StationConfig

MULTIPLIER = 0x5DEECE66D
INCREMENT = 0xB
MASK = (1 << 48) - 1
DOUBLE_UNIT = 1.0 / (1 << 53)

# Guards ln(0) in the exponential inversion
MIN_UNIFORM = 1e-12


class RandomStream(ABC):
    """
    Abstract base class for random number streams.

    Holds the generator state. Subclasses map the uniform deviate onto
    their distribution in __call__.
    """

    def __init__(self, seed: int = 0) -> None:
        self._seed_value = seed
        self._state = (seed ^ MULTIPLIER) & MASK

    @property
    def seed(self) -> int:
        """Seed the stream was created with."""
        return self._seed_value

    def _next(self, bits: int) -> int:
        """
        Advance the generator and return its top `bits` bits (bits <= 31).
        """
        self._state = (self._state * MULTIPLIER + INCREMENT) & MASK
        return self._state >> (48 - bits)

    def _uniform(self) -> float:
        """Uniform deviate on [0, 1) carrying 53 random bits."""
        return ((self._next(26) << 27) + self._next(27)) * DOUBLE_UNIT

    @abstractmethod
    def __call__(self) -> float:
        """Generate next random value from the distribution."""
        ...


class UniformStream(RandomStream):
    """Uniform distribution on [lo, hi)."""

    def __init__(self, lo: float, hi: float, seed: int = 0) -> None:
        super().__init__(seed)
        self._lo = lo
        self._hi = hi
        self._range = hi - lo

    @classmethod
    def with_width(cls, lo: float, width: float, seed: int = 0) -> UniformStream:
        """
        Uniform distribution on [lo, lo + width).

        Keeps `width` as given; `hi - lo` can differ from it in the last bit.
        """
        stream = cls(lo, lo + width, seed)
        stream._range = width
        return stream

    def __call__(self) -> float:
        return self._lo + (self._range * self._uniform())


class ExponentialStream(RandomStream):
    """
    Exponential distribution with given mean.

    The uniform deviate is floored at `epsilon` so a zero draw yields a
    large finite value instead of infinity.
    """

    def __init__(self, mean: float, seed: int = 0, epsilon: float = MIN_UNIFORM) -> None:
        super().__init__(seed)
        self._mean = mean
        self._epsilon = epsilon

    def __call__(self) -> float:
        return -self._mean * math.log(max(self._epsilon, self._uniform()))


class NormalStream(RandomStream):
    """
    Normal (Gaussian) distribution with given mean and standard deviation.

    Uses the Box-Muller-Marsaglia polar method. Each accepted pair yields
    two deviates; the second is kept for the next call.
    """

    def __init__(self, mean: float, std_dev: float, seed: int = 0) -> None:
        super().__init__(seed)
        self._mean = mean
        self._std_dev = std_dev
        self._z: float | None = None  # Cached second value from pair

    def _gaussian(self) -> float:
        if self._z is not None:
            x2 = self._z
            self._z = None
            return x2

        # Polar method
        while True:
            v1 = 2.0 * self._uniform() - 1.0
            v2 = 2.0 * self._uniform() - 1.0
            s = v1 * v1 + v2 * v2
            if 0.0 < s < 1.0:
                break

        s = math.sqrt((-2.0 * math.log(s)) / s)
        self._z = v2 * s
        return v1 * s

    def __call__(self) -> float:
        return self._mean + self._gaussian() * self._std_dev


@dataclass
class RandomStreamSet:
    """
    The four streams driving the station, one per random variable.

    Seeding them separately keeps the variables decorrelated: changing the
    seed (or the draw count) of one stream never shifts another.
    """

    arrival: ExponentialStream
    litres: UniformStream
    balk: UniformStream
    service: NormalStream

    @classmethod
    def from_config(cls, config: StationConfig) -> RandomStreamSet:
        c = config.constants
        return cls(
            arrival=ExponentialStream(c.mean_interarrival_time, config.seed_arrival),
            litres=UniformStream.with_width(
                c.litres_needed_min,
                c.litres_needed_range,
                config.seed_litres,
            ),
            balk=UniformStream(0.0, 1.0, config.seed_balk),
            service=NormalStream(0.0, 1.0, config.seed_service),
        )
