"""
Station entities: cars, pumps, the pump stand and the car queue.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator

from pumpsim.exceptions import InvariantError, PumpUnavailable, QueueEmpty

logger = logging.getLogger(__name__)


class Car:
    """
    A customer.

    The litres needed are something the car knows when it arrives, so they
    are fixed at construction. The arrival time is stamped once the car
    decides to stay.
    """

    __slots__ = ("_litres_needed", "arrival_time")

    def __init__(self, litres_needed: float) -> None:
        self._litres_needed = litres_needed
        self.arrival_time: float = 0.0

    @property
    def litres_needed(self) -> float:
        return self._litres_needed

    def __repr__(self) -> str:
        return f"Car(litres_needed={self._litres_needed:.3f}, arrival_time={self.arrival_time:.3f})"


class Pump:
    """A single pump. Serves at most one car at a time."""

    def __init__(self, number: int) -> None:
        self.number = number
        self._car: Car | None = None

    @property
    def car_in_service(self) -> Car | None:
        """Car currently at the pump, or None if idle."""
        return self._car

    @property
    def busy(self) -> bool:
        return self._car is not None

    def attach(self, car: Car) -> None:
        """Connect a car to this pump."""
        if self._car is not None:
            raise InvariantError(f"pump {self.number} is already serving {self._car!r}")
        self._car = car

    def detach(self) -> Car:
        """Disconnect and return the car in service."""
        if self._car is None:
            raise InvariantError(f"pump {self.number} has no car in service")
        car, self._car = self._car, None
        return car

    def __repr__(self) -> str:
        return f"Pump({self.number}, busy={self.busy})"


class PumpStand:
    """
    The complete collection of pumps at the station.

    Available pumps form a LIFO stack: take_available() hands out the pump
    released most recently. Pumps are interchangeable, the order only has
    to be deterministic.
    """

    def __init__(self, num_pumps: int) -> None:
        if num_pumps < 1:
            logger.warning("pump stand needs at least 1 pump (got %d); using 1", num_pumps)
            num_pumps = 1
        self._pumps = [Pump(n) for n in range(num_pumps)]
        # Top of stack is the end of the list
        self._available: list[Pump] = list(self._pumps)
        self._taken = 0
        self._released = 0

    @property
    def number_of_pumps(self) -> int:
        return len(self._pumps)

    @property
    def number_available(self) -> int:
        return len(self._available)

    @property
    def number_taken(self) -> int:
        """Pumps handed out since construction."""
        return self._taken

    @property
    def number_released(self) -> int:
        """Pumps returned since construction."""
        return self._released

    def pump_available(self) -> bool:
        """True if at least one pump is free."""
        return bool(self._available)

    def take_available(self) -> Pump:
        """
        Take the most recently released free pump.

        Raises:
            PumpUnavailable: every pump is in service.
        """
        if not self._available:
            raise PumpUnavailable("no pump available when needed")
        self._taken += 1
        return self._available.pop()

    def release(self, pump: Pump) -> None:
        """
        Put a pump back in the stock of available pumps.

        Raises:
            InvariantError: the stand is already full, or the pump is
                already available.
        """
        if len(self._available) >= len(self._pumps):
            raise InvariantError("attempt to release a pump into a full pump stand")
        if any(p is pump for p in self._available):
            raise InvariantError(f"pump {pump.number} is already available")
        self._released += 1
        self._available.append(pump)

    def __iter__(self) -> Iterator[Pump]:
        return iter(self._pumps)

    def __len__(self) -> int:
        return len(self._pumps)


class CarQueue:
    """
    The lineup of cars waiting for a pump (FIFO).

    Also accounts for the time the queue spends empty: the closed empty
    intervals are summed, and the open one runs from the moment the queue
    last became empty.
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self._cars: deque[Car] = deque()
        self._closed_empty_time = 0.0
        self._empty_since = start_time

    def __len__(self) -> int:
        return len(self._cars)

    def __iter__(self) -> Iterator[Car]:
        return iter(self._cars)

    def empty(self) -> bool:
        """Check if no car is waiting."""
        return not self._cars

    def empty_time(self, now: float) -> float:
        """Total time the queue has held no car, up to `now`."""
        if self._cars:
            return self._closed_empty_time
        return self._closed_empty_time + (now - self._empty_since)

    def insert(self, car: Car, now: float) -> None:
        """Put a newly-arrived car at the back of the queue."""
        if not self._cars:
            self._closed_empty_time += now - self._empty_since
        self._cars.append(car)

    def take_first(self, now: float) -> Car:
        """
        Remove and return the car at the front of the queue.

        Raises:
            QueueEmpty: no car is waiting.
        """
        if not self._cars:
            raise QueueEmpty("car queue unexpectedly empty")
        car = self._cars.popleft()
        if not self._cars:
            self._empty_since = now
        return car
