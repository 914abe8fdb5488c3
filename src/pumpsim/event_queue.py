"""
EventQueue - time-ordered store of pending events.

A binary heap keyed on (time, insertion counter). The counter makes the
ordering stable: an event scheduled for the same time as events already
pending is dispatched after all of them.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from pumpsim.exceptions import EventQueueEmpty

if TYPE_CHECKING:
    from pumpsim.events import Event


@dataclass(order=True)
class ScheduledEvent:
    """Entry in the event heap."""

    time: float
    counter: int  # Tie-breaker for insertion order
    event: "Event" = field(compare=False)


class EventQueue:
    """Pending events, extracted earliest first."""

    def __init__(self) -> None:
        self._heap: list[ScheduledEvent] = []
        self._counter = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Event]:
        """Iterate over pending events in dispatch order without removing them."""
        for entry in sorted(self._heap):
            yield entry.event

    def insert(self, event: Event) -> None:
        """Schedule an event behind every pending event with the same time."""
        heapq.heappush(self._heap, ScheduledEvent(event.time, self._counter, event))
        self._counter += 1

    def take_next(self) -> Event:
        """
        Remove and return the earliest pending event.

        Raises:
            EventQueueEmpty: nothing is pending.
        """
        if not self._heap:
            raise EventQueueEmpty("ran out of events")
        return heapq.heappop(self._heap).event

    def peek(self) -> Event | None:
        """Return the earliest pending event without removing it."""
        return self._heap[0].event if self._heap else None

    def print_queue(self) -> str:
        """Return string representation of the pending events."""
        lines = ["Event queue:"]
        for event in self:
            lines.append(f"  t={event.time:.4f} {event!r}")
        lines.append("End of event queue.")
        return "\n".join(lines)
