"""
Station configuration.

StationConfig is what the engine consumes. parse_config() turns the
seven-line text input (report interval, ending time, pump count and the
four stream seeds) into one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from pumpsim.exceptions import ConfigurationError


@dataclass(frozen=True)
class ModelConstants:
    """Fixed quantities modelling the real world."""

    # Economics: profit per litre sold, cost to operate one pump for the run
    profit_per_litre: float = 0.025
    pump_operating_cost: float = 20.0

    # Demand: litres needed are uniform on [min, min + range)
    litres_needed_min: float = 10.0
    litres_needed_range: float = 50.0

    # Service time: base + per-litre time + spread * N(0, 1)
    service_time_base: float = 150.0
    service_time_per_litre: float = 0.5
    service_time_spread: float = 30.0

    # Probability of not balking is (a + litres) / (b * (c + queue length))
    balk_a: float = 40.0
    balk_b: float = 25.0
    balk_c: float = 3.0

    mean_interarrival_time: float = 50.0  # seconds


@dataclass(frozen=True)
class StationConfig:
    """Configuration for one simulation run."""

    report_interval: float
    ending_time: float
    num_pumps: int
    seed_arrival: int
    seed_litres: int
    seed_balk: int
    seed_service: int
    constants: ModelConstants = field(default_factory=ModelConstants)

    def __post_init__(self) -> None:
        if math.isnan(self.report_interval) or self.report_interval < 0:
            raise ConfigurationError(
                f"report interval must be non-negative (got {self.report_interval})"
            )
        if not math.isfinite(self.ending_time) or self.ending_time < 0:
            raise ConfigurationError(
                f"ending time must be finite and non-negative (got {self.ending_time})"
            )

    @property
    def seeds(self) -> tuple[int, int, int, int]:
        """Stream seeds in input order: arrival, litres, balking, service."""
        return (self.seed_arrival, self.seed_litres, self.seed_balk, self.seed_service)

    @property
    def reports_enabled(self) -> bool:
        """True if periodic reports fall inside the run."""
        return 0 < self.report_interval <= self.ending_time


CONFIG_FIELDS = (
    ("report interval", float),
    ("ending time", float),
    ("number of pumps", int),
    ("arrival seed", int),
    ("litres seed", int),
    ("balking seed", int),
    ("service seed", int),
)


def parse_config(
    lines: Iterable[str],
    constants: ModelConstants | None = None,
) -> StationConfig:
    """
    Build a StationConfig from the seven input lines.

    Blank lines and surrounding whitespace are ignored.

    Raises:
        ConfigurationError: wrong number of values or a value that does not
            parse as its field's type.
    """
    values = [line.strip() for line in lines if line.strip()]
    if len(values) != len(CONFIG_FIELDS):
        raise ConfigurationError(
            f"expected {len(CONFIG_FIELDS)} configuration values, got {len(values)}"
        )

    parsed: list[float | int] = []
    for text, (name, kind) in zip(values, CONFIG_FIELDS):
        try:
            parsed.append(kind(text))
        except ValueError:
            raise ConfigurationError(f"invalid {name}: {text!r}") from None

    report_interval, ending_time, num_pumps, *seeds = parsed
    return StationConfig(
        report_interval=float(report_interval),
        ending_time=float(ending_time),
        num_pumps=int(num_pumps),
        seed_arrival=int(seeds[0]),
        seed_litres=int(seeds[1]),
        seed_balk=int(seeds[2]),
        seed_service=int(seeds[3]),
        constants=constants or ModelConstants(),
    )
