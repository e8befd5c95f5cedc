from __future__ import annotations

from threading import Lock
from typing import List, Tuple

from .models import HarvestSummary, TaskOutcome


class OutcomeCollector:
    """Thread-safe tally of task outcomes for one harvesting pass.

    Worker threads call record() as each task settles; the coordinator turns
    the tally into a HarvestSummary once every task has been joined."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: List[Tuple[int, TaskOutcome]] = []
        self._failed_provinces: List[str] = []

    def record(self, outcome: TaskOutcome, latency_ms: int = 0) -> None:
        """Record a settled task and how long it held its permit."""
        with self._lock:
            self._events.append((latency_ms, outcome))

    def record_province_failure(self, province: str) -> None:
        with self._lock:
            self._failed_provinces.append(province)

    def summary(self, dispatched: int, peak_concurrency: int = 0) -> HarvestSummary:
        """Aggregate everything recorded so far."""
        with self._lock:
            outcomes = [o for _, o in self._events]
            failed_provinces = tuple(self._failed_provinces)
        succeeded = sum(1 for o in outcomes if o.success)
        return HarvestSummary(
            dispatched=dispatched,
            succeeded=succeeded,
            failed=len(outcomes) - succeeded,
            failed_provinces=failed_provinces,
            peak_concurrency=peak_concurrency,
        )

    def avg_latency_ms(self) -> float:
        with self._lock:
            latencies = [ms for ms, _ in self._events]
        return (sum(latencies) / len(latencies)) if latencies else 0.0
