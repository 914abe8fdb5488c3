"""Exceptions raised by the simulation engine."""

from __future__ import annotations


class SimulationError(RuntimeError):
    """Base class for broken simulation invariants."""


class EventQueueEmpty(SimulationError):
    """The event queue ran dry before the end of the simulation."""


class QueueEmpty(SimulationError):
    """A car was requested from an empty car queue."""


class PumpUnavailable(SimulationError):
    """A pump was requested while every pump is in service."""


class InvariantError(SimulationError):
    """Station state is inconsistent with the event being processed."""


class ConfigurationError(ValueError):
    """Configuration input is malformed or out of range."""
