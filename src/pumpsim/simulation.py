"""
SimulationContext and the clock driver loop.

Every piece of mutable state of a run lives in one SimulationContext,
which is handed to each event handler in turn. The Simulation owns the
context and the event queue and drives the loop:

1. take the earliest pending event;
2. set the simulation time to the event's time;
3. run its handler and schedule the events it returns;
4. stop once an EndOfSimulation event has been handled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pumpsim.config import ModelConstants, StationConfig
from pumpsim.event_queue import EventQueue
from pumpsim.events import Arrival, EndOfSimulation, Event, Report
from pumpsim.exceptions import InvariantError
from pumpsim.random import RandomStreamSet
from pumpsim.station import CarQueue, PumpStand
from pumpsim.stats import Snapshot, StatisticsCollector

logger = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """Station state, statistics and random streams of one run."""

    config: StationConfig
    streams: RandomStreamSet
    car_queue: CarQueue
    pump_stand: PumpStand
    stats: StatisticsCollector
    now: float = 0.0
    snapshots: list[Snapshot] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: StationConfig) -> SimulationContext:
        c = config.constants
        return cls(
            config=config,
            streams=RandomStreamSet.from_config(config),
            car_queue=CarQueue(),
            pump_stand=PumpStand(config.num_pumps),
            stats=StatisticsCollector(c.profit_per_litre, c.pump_operating_cost),
        )

    @property
    def constants(self) -> ModelConstants:
        return self.config.constants

    @property
    def cars_in_system(self) -> int:
        """Cars waiting in the queue or being served."""
        busy = sum(1 for pump in self.pump_stand if pump.busy)
        return len(self.car_queue) + busy

    def snapshot(self) -> Snapshot:
        """Summarize the statistics at the current time."""
        return self.stats.snapshot(
            self.now,
            self.car_queue.empty_time(self.now),
            self.pump_stand.number_of_pumps,
        )

    def record_snapshot(self) -> Snapshot:
        """Take a snapshot and append it to the run's output."""
        snap = self.snapshot()
        self.snapshots.append(snap)
        return snap


class Simulation:
    """
    Event-scheduling simulation of one gas station.

    Construction schedules the initial events: the first Arrival at time 0,
    EndOfSimulation at the ending time, and the first Report if reports
    fall inside the run. The Arrival goes in first so that a run ending at
    time 0 still sees its first car.
    """

    def __init__(self, config: StationConfig) -> None:
        self._ctx = SimulationContext.from_config(config)
        self._events = EventQueue()
        self._terminated = False
        self._processed = 0

        self._events.insert(Arrival(0.0))
        self._events.insert(EndOfSimulation(config.ending_time))
        if config.reports_enabled:
            self._events.insert(Report(config.report_interval))

    @property
    def context(self) -> SimulationContext:
        return self._ctx

    @property
    def events(self) -> EventQueue:
        """Pending events."""
        return self._events

    @property
    def now(self) -> float:
        """Current simulation time."""
        return self._ctx.now

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def events_processed(self) -> int:
        return self._processed

    @property
    def snapshots(self) -> list[Snapshot]:
        """Snapshots recorded so far, in order."""
        return self._ctx.snapshots

    def step(self) -> Event:
        """
        Process the earliest pending event and return it.

        Raises:
            InvariantError: the simulation has already ended.
            EventQueueEmpty: no event is pending.
        """
        if self._terminated:
            raise InvariantError("simulation has already ended")

        event = self._events.take_next()
        self._ctx.now = event.time
        logger.debug("t=%.3f %s", event.time, type(event).__name__)

        for new_event in event.handle(self._ctx):
            self._events.insert(new_event)
        self._processed += 1

        if event.ends_simulation:
            self._terminated = True
        return event

    def run(self) -> list[Snapshot]:
        """Run until EndOfSimulation is handled; return all snapshots."""
        config = self._ctx.config
        logger.info(
            "Starting run: %d pumps, ending at %s, seeds %s",
            self._ctx.pump_stand.number_of_pumps,
            config.ending_time,
            config.seeds,
        )
        while not self._terminated:
            self.step()
        logger.info(
            "Run finished at t=%s after %d events (%d arrivals, mean service %.1f, longest wait %.1f)",
            self._ctx.now,
            self._processed,
            self._ctx.stats.arrivals,
            self._ctx.stats.mean_service_time,
            self._ctx.stats.longest_wait,
        )
        return self._ctx.snapshots


def simulate(config: StationConfig) -> list[Snapshot]:
    """Run a full simulation for `config` and return its snapshots."""
    return Simulation(config).run()
