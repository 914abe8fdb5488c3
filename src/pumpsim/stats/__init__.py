"""Statistics collection classes."""

from pumpsim.stats.mean import Mean
from pumpsim.stats.collector import Snapshot, StatisticsCollector

__all__ = [
    "Mean",
    "Snapshot",
    "StatisticsCollector",
]
