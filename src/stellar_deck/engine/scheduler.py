"""Timer queue - scripted battle delays as explicit scheduled events."""

import heapq
import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TimerKind(str, Enum):
    """Kinds of scheduled battle events."""

    PLAY_COMMIT = "play_commit"  # Settle delay before a played card resolves
    AUTO_END = "auto_end"  # Settle delay before an automatic end of turn
    ENEMY_ACTION = "enemy_action"  # Enemy "thinking" delay
    REWARD = "reward"  # Delay between victory and reward


class ManualClock:
    """Clock that only moves when told to. Used for tests and simulation."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += max(0.0, seconds)


@dataclass(order=True)
class ScheduledEvent:
    """An event due at a point in clock time."""

    due_at: float
    sequence: int
    kind: TimerKind = field(compare=False)
    payload: Any = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)


class TimerQueue:
    """Ordered queue of scheduled events for one battle session.

    Events due at the same time fire in scheduling order.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self.clock = clock or time.monotonic
        self._heap: list[ScheduledEvent] = []
        self._counter = itertools.count()
        self._listeners: list[Callable[[], None]] = []

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked whenever an event is scheduled."""
        self._listeners.append(callback)

    def schedule(self, delay: float, kind: TimerKind, payload: Any = None) -> ScheduledEvent:
        """Schedule an event ``delay`` seconds from now."""
        event = ScheduledEvent(
            due_at=self.clock() + max(0.0, delay),
            sequence=next(self._counter),
            kind=kind,
            payload=payload,
        )
        heapq.heappush(self._heap, event)
        for callback in self._listeners:
            callback()
        return event

    def cancel(self, event: ScheduledEvent | None) -> None:
        if event is not None:
            event.cancelled = True

    def cancel_all(self) -> int:
        """Cancel every pending event. Returns the count cancelled."""
        cancelled = 0
        for event in self._heap:
            if not event.cancelled:
                event.cancelled = True
                cancelled += 1
        return cancelled

    def pop_due(self) -> ScheduledEvent | None:
        """Pop the earliest event that is due now, skipping cancelled ones."""
        now = self.clock()
        while self._heap:
            event = self._heap[0]
            if event.cancelled:
                heapq.heappop(self._heap)
                continue
            if event.due_at > now:
                return None
            return heapq.heappop(self._heap)
        return None

    def next_due_at(self) -> float | None:
        """Clock time of the next live event, or None if nothing is pending."""
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)
        return self._heap[0].due_at if self._heap else None

    def seconds_until_next(self) -> float | None:
        due_at = self.next_due_at()
        if due_at is None:
            return None
        return max(0.0, due_at - self.clock())

    def pending(self, kind: TimerKind | None = None) -> int:
        """Count live events, optionally of one kind."""
        return sum(1 for e in self._heap if not e.cancelled and (kind is None or e.kind == kind))
