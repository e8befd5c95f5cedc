from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from .metrics import OutcomeCollector
from .models import TaskOutcome, WeatherReading
from .permits import PermitPool
from .rate_limiter import RequestDelay
from .reporting import ConsoleReporter


class BaseScraper(ABC):
    """Abstract fetch-and-extract pipeline for one detail URL.

    run() is the failure-isolation boundary:
    - Holds one permit from the shared pool for the whole task, delay included.
    - Waits the fixed delay before the request.
    - Any exception from validate(), fetch() or parse() becomes a failed
      TaskOutcome; nothing propagates to the caller or to sibling tasks.
    - Every outcome is recorded and reported as soon as it exists.
    """

    def __init__(
        self,
        permits: PermitPool,
        delay: RequestDelay,
        reporter: Optional[ConsoleReporter] = None,
        metrics: Optional[OutcomeCollector] = None,
    ) -> None:
        self._permits = permits
        self._delay = delay
        self._reporter = reporter
        self._metrics = metrics

    def run(self, url: str) -> TaskOutcome:
        with self._permits.permit():
            start_ms = self._now_ms()
            try:
                self.validate(url)
                self._delay.wait()
                response = self.fetch(url)
                reading = self.parse(response)
            except Exception as exc:  # noqa: BLE001
                outcome = TaskOutcome.failed(url, exc)
            else:
                outcome = TaskOutcome.ok(url, reading)

            if self._metrics:
                self._metrics.record(outcome, latency_ms=self._now_ms() - start_ms)
            if self._reporter:
                self._reporter.report(outcome)
            return outcome

    def validate(self, url: str) -> None:
        if not url:
            raise ValueError("url is required")

    @abstractmethod
    def fetch(self, url: str) -> Any:
        ...

    @abstractmethod
    def parse(self, response: Any) -> WeatherReading:
        ...

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)
