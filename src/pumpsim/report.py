"""
Column-aligned text rendering of snapshots.

The layout follows the classic gas station report: an introduction naming
the pump count and seeds, a two-line header, a rule, then one row per
snapshot.
"""

from __future__ import annotations

from typing import Iterable, TextIO

from pumpsim.config import StationConfig
from pumpsim.stats import Snapshot

UNKNOWN = "   Unknown"

HEADER = (
    " Current  Total  NoQueue  Car->Car  Average  Number  Average  Pump   Total     Lost",
    "  Time     Cars  Fraction    Time    Litres  Balked   Wait    Usage  Profit   Profit",
    "-" * 79,
)


def fmt_float(number: float | None, width: int, precision: int) -> str:
    """Right-align a number rounded to `precision` digits, or the unknown marker."""
    if number is None:
        return UNKNOWN
    return f"{number:{width}.{precision}f}"


def fmt_int(number: int, width: int) -> str:
    return f"{number:{width}d}"


def format_intro(config: StationConfig, num_pumps: int | None = None) -> str:
    """Introduction naming the pump count and the four seeds."""
    pumps = config.num_pumps if num_pumps is None else num_pumps
    seeds = "".join(f" {seed}" for seed in config.seeds)
    return (
        f"This simulation run uses {pumps} pumps and the following random number seeds:\n"
        f"{seeds}"
    )


def format_header() -> str:
    return "\n".join(HEADER)


def format_snapshot(snap: Snapshot) -> str:
    """One report row."""
    return "".join(
        [
            fmt_float(snap.time, 8, 0),
            fmt_int(snap.arrivals, 7),
            fmt_float(snap.no_queue_fraction, 8, 3),
            fmt_float(snap.car_to_car_time, 9, 3),
            fmt_float(snap.average_litres, 10, 3),
            fmt_int(snap.balked, 8),
            fmt_float(snap.average_wait, 9, 3),
            fmt_float(snap.pump_usage, 8, 3),
            fmt_float(snap.total_profit, 9, 2),
            fmt_float(snap.lost_profit, 9, 2),
        ]
    )


def render_report(
    config: StationConfig,
    snapshots: Iterable[Snapshot],
    num_pumps: int | None = None,
) -> str:
    """Full report text, newline-terminated."""
    lines = [format_intro(config, num_pumps), format_header()]
    lines.extend(format_snapshot(snap) for snap in snapshots)
    return "\n".join(lines) + "\n"


def write_report(
    config: StationConfig,
    snapshots: Iterable[Snapshot],
    out: TextIO,
    num_pumps: int | None = None,
) -> None:
    out.write(render_report(config, snapshots, num_pumps))
