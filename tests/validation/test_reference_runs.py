"""
Validation test for complete runs.

Compares full snapshot series against reference output recorded for
fixed configurations. Both engines must reproduce the same rows.
"""

import pytest

from pumpsim.config import StationConfig
from pumpsim.process_model import simulate_processes
from pumpsim.simulation import simulate

ENGINES = [simulate, simulate_processes]

# Three pumps, seeds 1 2 3 4, reports every 2000 s up to 10000 s
THREE_PUMPS = [
    (2000, 34, 0.6060000212767654, 58.8235294117647, 36.70978839713819, 6,
     41.752016861796164, 0.8052527080648137, -34.54091810280987, 5.744238240377337),
    (4000, 80, 0.4625124669083444, 50.0, 30.930020253343077, 16,
     62.886715938017794, 0.8699483602786221, -11.530811662921458, 13.39085216960762),
    (6000, 119, 0.38416637109047885, 50.42016806722689, 33.310839383381875, 23,
     73.75336166550301, 0.9033490253321306, 20.513077146527763, 18.586670019033328),
    (8000, 160, 0.36858241973217565, 50.0, 33.175829103913586, 33,
     70.64287555802218, 0.9088781088227699, 48.43430624392829, 24.269010171726055),
    (10000, 203, 0.40063188646654824, 49.26108374384236, 32.82782721478625, 42,
     65.68247094451246, 0.9028499920365709, 75.96340688420602, 30.63781623083419),
]

# One pump under heavy load, seeds 11 22 33 44
ONE_PUMP = [
    (5000, 100, 0.003142441208883011, 50.0, 33.7373830373258, 63,
     1068.7136785525274, 1.0153315933823026, 9.960732493645068, 54.38272509966944),
    (10000, 204, 0.0015712206044415054, 49.01960784313726, 33.708039491123806, 137,
     1051.6473207739793, 1.0059568114122335, 35.97878218287405, 115.93221922185735),
    (15000, 313, 0.0010474804029610037, 47.92332268370607, 34.05850160800429, 215,
     1134.9961308502825, 1.010498635792969, 65.89433172764102, 180.6134433549926),
    (20000, 419, 0.0007856103022207527, 47.7326968973747, 34.341532614351266, 291,
     1270.6617670481337, 1.0053384185246295, 96.2831192224983, 243.44443491283118),
]


class TestReferenceRuns:
    """Replication of recorded reference runs."""

    @pytest.mark.parametrize("run", ENGINES, ids=["events", "processes"])
    def test_three_pumps(self, make_config, assert_snapshots_match, run) -> None:
        config = make_config(report_interval=2000.0, ending_time=10000.0, num_pumps=3)
        assert_snapshots_match(run(config), THREE_PUMPS)

    @pytest.mark.parametrize("run", ENGINES, ids=["events", "processes"])
    def test_one_pump_heavy_load(self, assert_snapshots_match, run) -> None:
        config = StationConfig(
            report_interval=5000.0,
            ending_time=20000.0,
            num_pumps=1,
            seed_arrival=11,
            seed_litres=22,
            seed_balk=33,
            seed_service=44,
        )
        assert_snapshots_match(run(config), ONE_PUMP)

    def test_ending_at_time_zero(self, make_config, assert_snapshots_match) -> None:
        """The car arriving at time 0 is seen before the run ends."""
        config = make_config(report_interval=0.0, ending_time=0.0, num_pumps=1)
        expected = [(0, 1, 0.0, 0.0, 0.0, 0, None, 179416082005.5261, -20.0, 0.0)]
        assert_snapshots_match(simulate(config), expected)

    def test_final_counts(self, make_config) -> None:
        last = simulate(make_config())[-1]
        assert last.arrivals == 203
        assert last.balked == 42
        assert last.lost_profit / 0.025 == pytest.approx(1225.5126492333676, rel=1e-9)
