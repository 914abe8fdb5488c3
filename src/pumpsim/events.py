"""
Event kinds and their handlers.

Events are immutable. A handler mutates the station state held by the
SimulationContext and returns the fresh events it wants scheduled; the
clock inserts them in the order returned.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pumpsim.exceptions import InvariantError
from pumpsim.station import Car, Pump

if TYPE_CHECKING:
    from pumpsim.config import ModelConstants
    from pumpsim.simulation import SimulationContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event(ABC):
    """
    Base class for simulation events.

    Subclasses must implement handle(); the abstract method keeps an event
    kind without a handler from being instantiated.
    """

    time: float

    # True for the event after which the clock stops
    ends_simulation: ClassVar[bool] = False

    @abstractmethod
    def handle(self, ctx: SimulationContext) -> list[Event]:
        """Apply the event to the context and return the events to schedule."""
        ...


def not_balk_probability(litres: float, queue_length: int, constants: ModelConstants) -> float:
    """
    Probability that an arriving car joins the station.

    It shrinks as the queue grows and grows with the litres the car needs.
    An empty queue never turns a car away.
    """
    if queue_length == 0:
        return 1.0
    p = (constants.balk_a + litres) / (constants.balk_b * (constants.balk_c + queue_length))
    return min(1.0, max(0.0, p))


def car_balks(ctx: SimulationContext, litres: float) -> bool:
    """Decide whether an arriving car leaves without buying gas."""
    queue_length = len(ctx.car_queue)
    if queue_length == 0:
        return False
    p_not_balk = not_balk_probability(litres, queue_length, ctx.constants)
    return ctx.streams.balk() > p_not_balk


def service_duration(ctx: SimulationContext, car: Car) -> float:
    """
    Time the pump needs for a car.

    Normally distributed around a base time plus a per-litre time,
    floored at zero.
    """
    c = ctx.constants
    return max(
        0.0,
        c.service_time_base
        + c.service_time_per_litre * car.litres_needed
        + c.service_time_spread * ctx.streams.service(),
    )


def begin_service(ctx: SimulationContext, car: Car, pump: Pump) -> float:
    """Connect a car to a pump, collect its statistics and return the service time."""
    pump.attach(car)
    duration = service_duration(ctx, car)

    ctx.stats.accum_waiting_time(ctx.now - car.arrival_time)
    ctx.stats.accum_service_time(duration)
    return duration


def start_service(ctx: SimulationContext, car: Car, pump: Pump) -> Departure:
    """
    Start serving a car and schedule its departure.

    Not an event of its own: Arrival and Departure call it when a pump
    and a car meet.
    """
    return Departure(ctx.now + begin_service(ctx, car, pump), pump)


@dataclass(frozen=True)
class Arrival(Event):
    """A car pulls into the station."""

    def handle(self, ctx: SimulationContext) -> list[Event]:
        car = Car(ctx.streams.litres())
        ctx.stats.count_arrival()
        scheduled: list[Event] = []

        if car_balks(ctx, car.litres_needed):
            logger.debug("t=%.3f car balks (%.3f litres)", ctx.now, car.litres_needed)
            ctx.stats.accum_balk(car.litres_needed)
        else:
            car.arrival_time = ctx.now
            if ctx.pump_stand.pump_available():
                pump = ctx.pump_stand.take_available()
                scheduled.append(start_service(ctx, car, pump))
            else:
                ctx.car_queue.insert(car, ctx.now)

        scheduled.append(Arrival(ctx.now + ctx.streams.arrival()))
        return scheduled


@dataclass(frozen=True)
class Departure(Event):
    """A car leaves the pump it was served at."""

    pump: Pump

    def handle(self, ctx: SimulationContext) -> list[Event]:
        if not self.pump.busy:
            raise InvariantError(f"departure from pump {self.pump.number} without a car")

        departing = self.pump.detach()
        ctx.stats.accum_sale(departing.litres_needed)

        # The pump goes straight to the next waiting car, if any
        if ctx.car_queue:
            return [start_service(ctx, ctx.car_queue.take_first(ctx.now), self.pump)]

        ctx.pump_stand.release(self.pump)
        return []


@dataclass(frozen=True)
class Report(Event):
    """Interim statistics snapshot."""

    def handle(self, ctx: SimulationContext) -> list[Event]:
        ctx.record_snapshot()
        next_time = self.time + ctx.config.report_interval
        # A non-positive interval would report forever at the same instant
        if next_time <= ctx.now:
            return []
        return [Report(next_time)]


@dataclass(frozen=True)
class EndOfSimulation(Event):
    """Final snapshot; the clock stops after this event."""

    ends_simulation: ClassVar[bool] = True

    def handle(self, ctx: SimulationContext) -> list[Event]:
        ctx.record_snapshot()
        return []
