"""
Pytest configuration and fixtures for PumpSim.
"""

from typing import Callable

import pytest

from pumpsim.config import ModelConstants, StationConfig
from pumpsim.simulation import SimulationContext

ConfigFactory = Callable[..., StationConfig]


@pytest.fixture
def make_config() -> ConfigFactory:
    """Build a StationConfig with overridable defaults."""

    def _make(**overrides: object) -> StationConfig:
        values: dict = {
            "report_interval": 2000.0,
            "ending_time": 10000.0,
            "num_pumps": 3,
            "seed_arrival": 1,
            "seed_litres": 2,
            "seed_balk": 3,
            "seed_service": 4,
        }
        values.update(overrides)
        return StationConfig(**values)

    return _make


@pytest.fixture
def config(make_config: ConfigFactory) -> StationConfig:
    return make_config()


@pytest.fixture
def ctx(config: StationConfig) -> SimulationContext:
    """Fresh simulation context at time 0."""
    return SimulationContext.from_config(config)


@pytest.fixture
def constants() -> ModelConstants:
    return ModelConstants()


def _assert_snapshots_match(actual: list, expected: list, rel: float = 1e-9) -> None:
    assert len(actual) == len(expected), f"{len(actual)} snapshots, expected {len(expected)}"
    for i, (snap, row) in enumerate(zip(actual, expected)):
        values = (
            snap.time,
            snap.arrivals,
            snap.no_queue_fraction,
            snap.car_to_car_time,
            snap.average_litres,
            snap.balked,
            snap.average_wait,
            snap.pump_usage,
            snap.total_profit,
            snap.lost_profit,
        )
        for j, (a, e) in enumerate(zip(values, row)):
            if e is None:
                assert a is None, f"snapshot {i} field {j}: {a} != Unknown"
            else:
                assert a == pytest.approx(e, rel=rel, abs=1e-9), f"snapshot {i} field {j}: {a} != {e}"


@pytest.fixture
def assert_snapshots_match() -> Callable[..., None]:
    """
    Compare snapshots field by field against expected rows.

    Rows list the Snapshot fields in declaration order; None marks an
    unknown ratio.
    """
    return _assert_snapshots_match
