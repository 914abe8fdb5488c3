"""
Statistics collection for the station and the Snapshot record.

The collector only accumulates; snapshot() is a pure projection of the
accumulated values at a given time and never resets anything.
"""

from __future__ import annotations

from dataclasses import dataclass

from pumpsim.stats.mean import Mean

# Floor on elapsed time in the pump usage denominator
MIN_ELAPSED = 1e-9


@dataclass(frozen=True)
class Snapshot:
    """
    Point-in-time summary of the run.

    Ratios that are undefined (no arrivals, nobody served yet) are None.
    """

    time: float
    arrivals: int
    no_queue_fraction: float
    car_to_car_time: float | None
    average_litres: float | None
    balked: int
    average_wait: float | None
    pump_usage: float
    total_profit: float
    lost_profit: float


class StatisticsCollector:
    """
    Running counts and sums for one simulation run.

    Sales and lost sales are Mean accumulators over litres, so their sample
    counts are the served and balked customer counts.
    """

    def __init__(self, profit_per_litre: float = 0.025, pump_operating_cost: float = 20.0) -> None:
        self._profit_per_litre = profit_per_litre
        self._pump_operating_cost = pump_operating_cost
        self._arrivals = 0
        self._litres_sold = Mean()
        self._litres_missed = Mean()
        self._waiting_time = Mean()
        self._service_time = Mean()

    def count_arrival(self) -> None:
        """Record an arrival."""
        self._arrivals += 1

    def accum_balk(self, litres: float) -> None:
        """Record and count a lost sale."""
        self._litres_missed += litres

    def accum_sale(self, litres: float) -> None:
        """Record and count a sale."""
        self._litres_sold += litres

    def accum_waiting_time(self, interval: float) -> None:
        """Record one customer's time between arrival and service start."""
        self._waiting_time += interval

    def accum_service_time(self, interval: float) -> None:
        """Record one customer's time at the pump."""
        self._service_time += interval

    @property
    def arrivals(self) -> int:
        return self._arrivals

    @property
    def served(self) -> int:
        return self._litres_sold.number_of_samples

    @property
    def balked(self) -> int:
        return self._litres_missed.number_of_samples

    @property
    def service_starts(self) -> int:
        return self._service_time.number_of_samples

    @property
    def litres_sold(self) -> float:
        return self._litres_sold.sum

    @property
    def litres_missed(self) -> float:
        return self._litres_missed.sum

    @property
    def total_waiting_time(self) -> float:
        return self._waiting_time.sum

    @property
    def total_service_time(self) -> float:
        return self._service_time.sum

    @property
    def mean_service_time(self) -> float:
        """Average service time over the services started, 0 if none."""
        return self._service_time.mean

    @property
    def longest_wait(self) -> float:
        """Longest time a car waited for a pump, 0 if none."""
        return max(0.0, self._waiting_time.max)

    def snapshot(self, now: float, queue_empty_time: float, num_pumps: int) -> Snapshot:
        """Summarize the statistics at simulation time `now`."""
        arrivals = self._arrivals
        served = self.served

        no_queue_fraction = queue_empty_time / now if now > 0.0 else 0.0

        if arrivals > 0:
            car_to_car_time = now / arrivals
            average_litres = (self.litres_sold + self.litres_missed) / arrivals
        else:
            car_to_car_time = None
            average_litres = None

        average_wait = self.total_waiting_time / served if served > 0 else None

        pump_usage = self.total_service_time / (num_pumps * max(MIN_ELAPSED, now))
        total_profit = (
            self.litres_sold * self._profit_per_litre
            - self._pump_operating_cost * num_pumps
        )
        lost_profit = self.litres_missed * self._profit_per_litre

        return Snapshot(
            time=now,
            arrivals=arrivals,
            no_queue_fraction=no_queue_fraction,
            car_to_car_time=car_to_car_time,
            average_litres=average_litres,
            balked=self.balked,
            average_wait=average_wait,
            pump_usage=pump_usage,
            total_profit=total_profit,
            lost_profit=lost_profit,
        )
