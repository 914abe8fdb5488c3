"""
Tests for the SimPy rendition of the station.
"""

import pytest
import simpy

from pumpsim.exceptions import ConfigurationError, InvariantError
from pumpsim.process_model import ProcessStation, simulate_processes
from pumpsim.simulation import simulate


class TestProcessStation:
    """Agreement with the event-scheduling engine and lifecycle checks."""

    @pytest.mark.parametrize("num_pumps", [1, 2, 4])
    def test_matches_event_engine(self, make_config, assert_snapshots_match, num_pumps: int) -> None:
        config = make_config(num_pumps=num_pumps, report_interval=1500.0, ending_time=12000.0)
        expected = [
            (
                s.time, s.arrivals, s.no_queue_fraction, s.car_to_car_time, s.average_litres,
                s.balked, s.average_wait, s.pump_usage, s.total_profit, s.lost_profit,
            )
            for s in simulate(config)
        ]
        assert_snapshots_match(simulate_processes(config), expected)

    def test_reports_disabled(self, make_config) -> None:
        snapshots = simulate_processes(make_config(report_interval=0.0))
        assert [snap.time for snap in snapshots] == [10000.0]

    def test_uses_given_environment(self, config) -> None:
        env = simpy.Environment()
        station = ProcessStation(config, env)
        station.run()
        assert station.env is env
        assert env.now == 10000.0
        assert station.context.now == 10000.0

    def test_run_twice(self, config) -> None:
        station = ProcessStation(config)
        station.run()
        with pytest.raises(InvariantError):
            station.run()

    def test_needs_positive_ending_time(self, make_config) -> None:
        with pytest.raises(ConfigurationError):
            ProcessStation(make_config(report_interval=0.0, ending_time=0.0))

    def test_cars_accounted_for(self, make_config) -> None:
        station = ProcessStation(make_config(num_pumps=2, ending_time=15000.0))
        station.run()
        ctx = station.context
        stats = ctx.stats
        assert stats.served + stats.balked + ctx.cars_in_system == stats.arrivals
        assert stats.service_starts == stats.served + sum(1 for p in ctx.pump_stand if p.busy)
