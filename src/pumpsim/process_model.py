"""
The station as SimPy processes.

Process-interaction rendition of the same model the event-scheduling
engine runs: an arrivals process, one service process per busy pump and a
reporter process, all sharing one SimulationContext. Random draws happen
in the same order on every stream as in the event engine, so both produce
the same snapshots for the same configuration; the rendition exists to
cross-check the engine.
"""

from __future__ import annotations

import logging
from typing import Generator

import simpy

from pumpsim.config import StationConfig
from pumpsim.events import begin_service, car_balks
from pumpsim.exceptions import ConfigurationError, InvariantError
from pumpsim.simulation import SimulationContext
from pumpsim.station import Car, Pump
from pumpsim.stats import Snapshot

logger = logging.getLogger(__name__)


class ProcessStation:
    """
    Gas station driven by a SimPy environment.

    SimPy stops a run just before the events due at the `until` time,
    which matches the event engine dispatching EndOfSimulation ahead of
    anything else due at the ending time.
    """

    def __init__(self, config: StationConfig, env: simpy.Environment | None = None) -> None:
        if config.ending_time <= 0:
            raise ConfigurationError(
                f"process model needs a positive ending time (got {config.ending_time})"
            )
        self._env = env if env is not None else simpy.Environment()
        self._ctx = SimulationContext.from_config(config)
        self._finished = False

    @property
    def env(self) -> simpy.Environment:
        """Get the SimPy environment."""
        return self._env

    @property
    def context(self) -> SimulationContext:
        return self._ctx

    @property
    def snapshots(self) -> list[Snapshot]:
        return self._ctx.snapshots

    def _sync_clock(self) -> None:
        self._ctx.now = self._env.now

    def _arrivals(self) -> Generator[simpy.Event, None, None]:
        ctx = self._ctx
        while True:
            self._sync_clock()
            car = Car(ctx.streams.litres())
            ctx.stats.count_arrival()

            if car_balks(ctx, car.litres_needed):
                ctx.stats.accum_balk(car.litres_needed)
            else:
                car.arrival_time = ctx.now
                if ctx.pump_stand.pump_available():
                    pump = ctx.pump_stand.take_available()
                    duration = begin_service(ctx, car, pump)
                    self._env.process(self._pump_service(pump, duration))
                else:
                    ctx.car_queue.insert(car, ctx.now)

            yield self._env.timeout(ctx.streams.arrival())

    def _pump_service(self, pump: Pump, duration: float) -> Generator[simpy.Event, None, None]:
        """Serve cars at one pump until the queue runs dry."""
        ctx = self._ctx
        while True:
            yield self._env.timeout(duration)
            self._sync_clock()

            departing = pump.detach()
            ctx.stats.accum_sale(departing.litres_needed)

            if ctx.car_queue.empty():
                ctx.pump_stand.release(pump)
                return
            duration = begin_service(ctx, ctx.car_queue.take_first(ctx.now), pump)

    def _reporter(self) -> Generator[simpy.Event, None, None]:
        interval = self._ctx.config.report_interval
        while True:
            yield self._env.timeout(interval)
            self._sync_clock()
            self._ctx.record_snapshot()
            if self._env.now + interval <= self._env.now:
                return

    def run(self) -> list[Snapshot]:
        """Run to the ending time; return all snapshots."""
        if self._finished:
            raise InvariantError("process station has already run")
        config = self._ctx.config

        self._env.process(self._arrivals())
        if config.reports_enabled:
            self._env.process(self._reporter())

        logger.info("Starting SimPy run until t=%s", config.ending_time)
        self._env.run(until=config.ending_time)

        self._ctx.now = config.ending_time
        self._ctx.record_snapshot()
        self._finished = True
        return self._ctx.snapshots


def simulate_processes(config: StationConfig) -> list[Snapshot]:
    """Run the SimPy rendition for `config` and return its snapshots."""
    return ProcessStation(config).run()
