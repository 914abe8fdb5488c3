"""
Tests for EventQueue ordering.
"""

import pytest

from pumpsim.event_queue import EventQueue
from pumpsim.events import Arrival, Departure, EndOfSimulation, Report
from pumpsim.exceptions import EventQueueEmpty, SimulationError
from pumpsim.station import Pump


class TestEventQueue:
    """Time ordering and the insertion-order tie-break."""

    def test_empty_queue(self) -> None:
        q = EventQueue()
        assert len(q) == 0
        assert not q
        assert q.peek() is None

    def test_take_next_on_empty_raises(self) -> None:
        with pytest.raises(EventQueueEmpty):
            EventQueue().take_next()

    def test_empty_is_a_simulation_error(self) -> None:
        with pytest.raises(SimulationError):
            EventQueue().take_next()

    def test_nondecreasing_times(self) -> None:
        """Events come out in time order regardless of insertion order."""
        times = [5.0, 1.0, 3.5, 0.0, 9.25, 3.5, 2.0, 7.0, 1.0]
        q = EventQueue()
        for t in times:
            q.insert(Arrival(t))

        out = [q.take_next().time for _ in range(len(times))]
        assert out == sorted(times)
        assert not q

    def test_equal_times_first_in_first_out(self) -> None:
        """Among equal times, the event inserted first is dispatched first."""
        end = EndOfSimulation(10.0)
        report = Report(10.0)
        arrival = Arrival(10.0)
        q = EventQueue()
        q.insert(end)
        q.insert(report)
        q.insert(Arrival(2.0))
        q.insert(arrival)

        assert q.take_next().time == 2.0
        assert q.take_next() is end
        assert q.take_next() is report
        assert q.take_next() is arrival

    def test_new_event_goes_behind_existing_ties(self) -> None:
        """Interleaved inserts and removals keep the tie-break stable."""
        pumps = [Pump(n) for n in range(4)]
        q = EventQueue()
        q.insert(Departure(4.0, pumps[0]))
        q.insert(Departure(4.0, pumps[1]))
        first = q.take_next()
        q.insert(Departure(4.0, pumps[2]))
        q.insert(Departure(3.0, pumps[3]))

        assert first.pump is pumps[0]
        assert [e.pump for e in (q.take_next() for _ in range(3))] == [
            pumps[3],
            pumps[1],
            pumps[2],
        ]

    def test_peek_does_not_remove(self) -> None:
        q = EventQueue()
        q.insert(Arrival(1.0))
        q.insert(Arrival(0.5))
        assert q.peek().time == 0.5
        assert len(q) == 2

    def test_iteration_is_non_destructive(self) -> None:
        q = EventQueue()
        for t in (3.0, 1.0, 2.0):
            q.insert(Report(t))
        assert [e.time for e in q] == [1.0, 2.0, 3.0]
        assert len(q) == 3

    def test_print_queue(self) -> None:
        q = EventQueue()
        q.insert(EndOfSimulation(100.0))
        text = q.print_queue()
        assert text.startswith("Event queue:")
        assert "t=100.0000" in text
        assert text.endswith("End of event queue.")
