from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional


class PermitPool:
    """Counting semaphore that bounds how many detail tasks run at once.

    Built on a Condition so the pool can also report how many permits are
    held right now and the most ever held at once (peak). One instance is
    shared by reference between every task of a run.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = int(capacity)
        self._cv = threading.Condition(threading.Lock())
        self._in_use = 0
        self._peak = 0

    def acquire(self, timeout: Optional[float] = None) -> bool:
        """Block until a permit is free. Returns False only if timeout expires."""
        with self._cv:
            if not self._cv.wait_for(lambda: self._in_use < self._capacity, timeout=timeout):
                return False
            self._in_use += 1
            self._peak = max(self._peak, self._in_use)
            return True

    def release(self) -> None:
        with self._cv:
            if self._in_use <= 0:
                raise RuntimeError("PermitPool released more times than acquired")
            self._in_use -= 1
            self._cv.notify()

    @contextmanager
    def permit(self) -> Iterator[None]:
        """Hold one permit for the body of a with-block, releasing it on every exit path."""
        self.acquire()
        try:
            yield
        finally:
            self.release()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        with self._cv:
            return self._in_use

    @property
    def available(self) -> int:
        with self._cv:
            return self._capacity - self._in_use

    @property
    def peak(self) -> int:
        with self._cv:
            return self._peak
