from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pledge.clocks import StepClock
from pledge.delay_queue import DelayQ


class StepScheduler:
    """Deterministic scheduler advanced explicitly by its owner.

    Callbacks are queued against a `StepClock`. Nothing runs until `tick` or
    `run` is called, which makes the "not this turn" guarantee of settlement
    observable in tests: everything that happens before the next tick happens
    in the current turn.
    """

    def __init__(self, clock: StepClock | None = None) -> None:
        self.clock = clock or StepClock()
        self._delayed = DelayQ[Callable[[], Any]]()

    def __len__(self) -> int:
        return len(self._delayed)

    def schedule(self, callback: Callable[[], Any], delay: float) -> int:
        assert delay >= 0, "delay must be greater or equal than 0"
        return self._delayed.add(callback, self.clock.time() + delay)

    def tick(self) -> int:
        """Advance the clock to the next due time and run what is due.

        Callbacks scheduled while the tick runs are left for a later tick.
        Returns the number of callbacks run.
        """
        time = self._delayed.next_time()
        if time is None:
            return 0

        self.clock.step(max(time, self.clock.time()))
        now = self.clock.time()
        callbacks = self._delayed.get(now)
        for i, callback in enumerate(callbacks):
            try:
                callback()
            except Exception:
                # callbacks that did not get to run stay due
                for rest in callbacks[i + 1 :]:
                    self._delayed.add(rest, now)
                raise
        return len(callbacks)

    def run(self, limit: int | None = None) -> int:
        """Tick until nothing is left to run, or `limit` ticks have elapsed."""
        ticks = 0
        while not self._delayed.empty() and (limit is None or ticks < limit):
            self.tick()
            ticks += 1
        return ticks
