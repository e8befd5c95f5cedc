from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait as wait_all
from typing import Callable, List

from .models import TaskOutcome


class ThreadPoolController:
    """Dispatches detail tasks onto a thread pool and joins them at the end.

    - submit() never blocks; the permit pool inside each task is what bounds
      concurrency, so max_workers only caps how many threads may wait on it.
    - Every submitted future is kept until join().
    - A task that raises instead of returning an outcome is turned into a
      failed TaskOutcome, so one broken task cannot abort the join.
    """

    def __init__(self, max_workers: int) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="harvest")
        self._lock = threading.Lock()
        self._futures: List[Future] = []
        self._running = False

    def start(self) -> None:
        self._running = True

    def stop(self, wait: bool = True) -> None:
        with self._lock:
            self._running = False
        self._executor.shutdown(wait=wait, cancel_futures=False)

    def submit(self, fn: Callable[[str], TaskOutcome], url: str) -> Future:
        """Schedule fn(url) and return its future without waiting for a slot."""
        with self._lock:
            if not self._running:
                raise RuntimeError("controller is not running")
            future = self._executor.submit(self._wrap_task, fn, url)
            self._futures.append(future)
        return future

    def join(self) -> List[TaskOutcome]:
        """Wait for every submitted task to settle and return their outcomes in submission order."""
        with self._lock:
            futures = list(self._futures)
        wait_all(futures)
        return [f.result() for f in futures]

    @staticmethod
    def _wrap_task(fn: Callable[[str], TaskOutcome], url: str) -> TaskOutcome:
        try:
            return fn(url)
        except Exception as exc:  # noqa: BLE001
            return TaskOutcome.failed(url, exc)

    @property
    def dispatched(self) -> int:
        with self._lock:
            return len(self._futures)
