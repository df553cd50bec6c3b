import heapq
import itertools
import time
from typing import Callable, List, Tuple


class Scheduler:
    """Deferred callbacks run from the game loop instead of blocking it.

    Callbacks are queued with `call_later` and executed by `run_due`, which
    the loop driver calls once per tick. The clock is injectable so timers
    can be driven by hand in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._pending: List[Tuple[float, int, Callable, tuple]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._pending)

    def call_later(self, delay: float, callback: Callable, *args) -> None:
        due = self.clock() + delay
        heapq.heappush(self._pending, (due, next(self._counter), callback, args))

    def run_due(self) -> int:
        now = self.clock()
        ran = 0
        while self._pending and self._pending[0][0] <= now:
            _, _, callback, args = heapq.heappop(self._pending)
            callback(*args)
            ran += 1
        return ran

    def clear(self) -> None:
        self._pending.clear()
