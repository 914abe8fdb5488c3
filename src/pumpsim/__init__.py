"""
PumpSim - discrete event simulation of a gas station.

One shared car queue, a pool of pumps, four independently seeded random
streams and periodic statistics snapshots.
"""

from pumpsim.config import ModelConstants, StationConfig, parse_config
from pumpsim.event_queue import EventQueue
from pumpsim.events import Arrival, Departure, EndOfSimulation, Event, Report
from pumpsim.exceptions import (
    ConfigurationError,
    EventQueueEmpty,
    InvariantError,
    PumpUnavailable,
    QueueEmpty,
    SimulationError,
)
from pumpsim.process_model import ProcessStation, simulate_processes
from pumpsim.random import (
    RandomStream,
    UniformStream,
    ExponentialStream,
    NormalStream,
    RandomStreamSet,
)
from pumpsim.simulation import Simulation, SimulationContext, simulate
from pumpsim.station import Car, CarQueue, Pump, PumpStand
from pumpsim.stats import Mean, Snapshot, StatisticsCollector

__version__ = "0.1.0"
__all__ = [
    # Engine
    "Simulation",
    "SimulationContext",
    "simulate",
    "EventQueue",
    # Events
    "Event",
    "Arrival",
    "Departure",
    "Report",
    "EndOfSimulation",
    # SimPy rendition
    "ProcessStation",
    "simulate_processes",
    # Station
    "Car",
    "CarQueue",
    "Pump",
    "PumpStand",
    # Configuration
    "ModelConstants",
    "StationConfig",
    "parse_config",
    # Random
    "RandomStream",
    "UniformStream",
    "ExponentialStream",
    "NormalStream",
    "RandomStreamSet",
    # Statistics
    "Mean",
    "Snapshot",
    "StatisticsCollector",
    # Errors
    "SimulationError",
    "EventQueueEmpty",
    "QueueEmpty",
    "PumpUnavailable",
    "InvariantError",
    "ConfigurationError",
]
