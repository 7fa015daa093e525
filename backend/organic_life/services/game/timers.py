import heapq
import itertools
import logging
import threading
import time
from typing import Callable, Dict, Hashable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class SystemClock:
    """Wall-clock milliseconds since the epoch (challenge start/end stamps)."""

    def now_ms(self) -> float:
        return time.time() * 1000.0


class MonotonicClock:
    """Monotonic milliseconds; used for expiry of ephemeral events."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError('Cannot move a clock backwards')
        self._now += ms
        return self._now

    def set(self, now_ms: float) -> None:
        self._now = float(now_ms)


class TimerQueue:
    """Callbacks scheduled against a clock and fired on ``tick()``.

    - One pending timer per key; rescheduling a key replaces its deadline
    - ``tick()`` fires every due callback in deadline order and returns the keys
    - Nothing runs on its own; the owner decides when to tick
    """

    def __init__(self, clock=None):
        self.clock = clock or MonotonicClock()
        self._heap: List[Tuple[float, int, Hashable]] = []
        self._pending: Dict[Hashable, Tuple[float, int, Callable[[], None]]] = {}
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def schedule(self, key: Hashable, delay_ms: float, callback: Callable[[], None]) -> float:
        deadline = self.clock.now_ms() + max(0.0, float(delay_ms))
        seq = next(self._seq)
        with self._lock:
            self._pending[key] = (deadline, seq, callback)
            heapq.heappush(self._heap, (deadline, seq, key))
        return deadline

    def cancel(self, key: Hashable) -> bool:
        with self._lock:
            return self._pending.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._pending.clear()
            self._heap.clear()

    def deadline(self, key: Hashable) -> Optional[float]:
        entry = self._pending.get(key)
        return entry[0] if entry else None

    def __len__(self):
        return len(self._pending)

    def tick(self) -> List[Hashable]:
        now = self.clock.now_ms()
        due = []
        with self._lock:
            while self._heap and self._heap[0][0] <= now:
                deadline, seq, key = heapq.heappop(self._heap)
                entry = self._pending.get(key)
                # stale heap entry: cancelled or rescheduled since
                if entry is None or entry[1] != seq:
                    continue
                del self._pending[key]
                due.append((key, entry[2]))
        for key, callback in due:
            try:
                callback()
            except Exception:
                logger.exception(f"[timer-fire] key={key!r} callback failed")
        return [key for key, _ in due]
