from __future__ import annotations

import time
from typing import Callable


class RequestDelay:
    """Fixed, non-adaptive pause taken before every detail-page request.

    wait() is called while the task holds its permit, so the pause bounds
    both the request rate towards the remote site and overall task
    throughput. A delay of 0 disables it."""

    def __init__(self, seconds: float, sleep: Callable[[float], None] = time.sleep) -> None:
        if seconds < 0:
            raise ValueError("delay must not be negative")
        self._seconds = float(seconds)
        self._sleep = sleep

    def wait(self) -> None:
        """Block the current thread for the configured delay."""
        if self._seconds <= 0:
            return
        self._sleep(self._seconds)
